"""Public Python API for tagver.

Derives a release version from ``git describe --tags --long`` output by
bumping the tag's patch number by the number of commits since the tag.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from tagver.deriver import classify, derive, facts_to_dict, parse_description, render_facts
from tagver.errors import DescribeError, InvalidTagFormat, OutputError, TagVerError
from tagver.git import git_describe
from tagver.model import OUTPUT_KEYS, Channel, VersionDescriptor, VersionFacts

try:
    __version__: str = version("tagver")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.1.0"


__all__ = [
    "__version__",
    "OUTPUT_KEYS",
    "Channel",
    "DescribeError",
    "InvalidTagFormat",
    "OutputError",
    "TagVerError",
    "VersionDescriptor",
    "VersionFacts",
    "classify",
    "derive",
    "facts_to_dict",
    "git_describe",
    "parse_description",
    "render_facts",
]
