import json
import re
from typing import Callable, Dict, Optional, Tuple

from tagver.errors import InvalidTagFormat
from tagver.git import git_describe
from tagver.model import OUTPUT_KEYS, Channel, VersionDescriptor, VersionFacts

TAG_PATTERN = re.compile(
    r"(?P<prefix>v)?(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?P<pre>-[0-9A-Za-z.-]+)?"
)
OUTPUT_FORMATS = ("lines", "json")

_NAMED_CHANNELS: Dict[str, Tuple[str, Channel]] = {
    "-alpha": ("Alpha", Channel.ALPHA),
    "-beta": ("Beta", Channel.BETA),
}


def _split_description(description: str) -> Tuple[str, str, str]:
    head, marker, sha = description.rpartition("-g")
    if not marker:
        raise InvalidTagFormat(description, description=description)
    tag, sep, commits = head.rpartition("-")
    if not sep:
        raise InvalidTagFormat(head, description=description)
    if not (commits.isascii() and commits.isdigit()):
        raise InvalidTagFormat(tag, description=description)
    return tag, commits, sha


def parse_description(description: str) -> VersionDescriptor:
    """Parse a ``<tag>-<commits>-g<sha>`` describe string.

    Args:
        description: Output of ``git describe --tags --long`` or an equivalent
            string. Surrounding whitespace is ignored.

    Returns:
        The parsed :class:`VersionDescriptor`.

    Raises:
        InvalidTagFormat: If the ``-<commits>-g<sha>`` suffix is missing or the
            recovered tag is not semver-like.

    Example:
        >>> parse_description("v1.2.3-5-gabc123").version
        'v1.2.8'
    """
    raw = description.strip()
    tag, commits, sha = _split_description(raw)

    match = TAG_PATTERN.fullmatch(tag)
    if match is None:
        raise InvalidTagFormat(tag, description=raw)

    return VersionDescriptor(
        raw_description=raw,
        tag=tag,
        tag_prefix=match.group("prefix"),
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        prerelease_suffix=match.group("pre"),
        commits_since_tag=int(commits),
        commit_sha=sha,
        major_literal=match.group("major"),
        minor_literal=match.group("minor"),
    )


def classify(version: str, prerelease_suffix: Optional[str]) -> Tuple[str, Channel]:
    """Return the release name and channel for a derived version.

    Only the first dot-separated identifier of the suffix selects the channel,
    so ``-beta`` and ``-beta.1`` are both beta releases.
    """
    identifier = (prerelease_suffix or "").split(".", 1)[0]
    named = _NAMED_CHANNELS.get(identifier)
    if named is None:
        return version, Channel.STABLE
    label, channel = named
    return f"{label} {version}", channel


def derive(
    description: Optional[str] = None,
    artifact_basename: str = "",
    *,
    describe: Optional[Callable[[], str]] = None,
) -> VersionFacts:
    """Derive release facts from a describe string.

    Args:
        description: Describe string used verbatim. When ``None`` or empty
            the ``describe`` collaborator is queried instead.
        artifact_basename: Copied into the result unchanged.
        describe: Zero-argument callable returning a describe string. Defaults
            to :func:`tagver.git.git_describe` in the current directory.

    Returns:
        The derived :class:`VersionFacts`.

    Raises:
        InvalidTagFormat: If the describe string cannot be parsed.
        DescribeError: If the describe collaborator fails.
    """
    if not description:
        description = (describe or git_describe)()

    descriptor = parse_description(description)
    version = descriptor.version
    release_name, channel = classify(version, descriptor.prerelease_suffix)
    return VersionFacts(
        version=version,
        is_prerelease=descriptor.is_prerelease,
        tag=version,
        release_name=release_name,
        channel=channel,
        artifact_basename=artifact_basename,
    )


def facts_to_dict(facts: VersionFacts) -> Dict[str, str]:
    """Serialize :class:`VersionFacts` into the ordered output mapping."""
    values = {
        "version": facts.version,
        "prerelease": "true" if facts.is_prerelease else "false",
        "tag": facts.tag,
        "name": facts.release_name,
        "channel": facts.channel.value,
        "artifact_basename": facts.artifact_basename,
    }
    return {key: values[key] for key in OUTPUT_KEYS}


def render_facts(facts: VersionFacts, fmt: str = "lines") -> str:
    """Render facts as ``key=value`` lines or as a JSON object."""
    payload = facts_to_dict(facts)
    if fmt == "lines":
        return "".join(f"{key}={value}\n" for key, value in payload.items())
    if fmt == "json":
        return json.dumps(payload, indent=2) + "\n"
    raise ValueError(
        f"Unknown output format '{fmt}'. Expected one of: {', '.join(OUTPUT_FORMATS)}."
    )
