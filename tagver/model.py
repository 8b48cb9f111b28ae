from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


OUTPUT_KEYS: Tuple[str, ...] = (
    "version",
    "prerelease",
    "tag",
    "name",
    "channel",
    "artifact_basename",
)


class Channel(Enum):
    ALPHA = "alpha"
    BETA = "beta"
    STABLE = "stable"


@dataclass(frozen=True)
class VersionDescriptor:
    raw_description: str
    tag: str
    tag_prefix: Optional[str]
    major: int
    minor: int
    patch: int
    prerelease_suffix: Optional[str]
    commits_since_tag: int
    commit_sha: str = ""
    major_literal: str = ""
    minor_literal: str = ""

    @property
    def new_patch(self) -> int:
        return self.patch + self.commits_since_tag

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease_suffix)

    @property
    def version(self) -> str:
        return (
            f"{self.tag_prefix or ''}{self.major_literal or self.major}"
            f".{self.minor_literal or self.minor}.{self.new_patch}"
            f"{self.prerelease_suffix or ''}"
        )


@dataclass(frozen=True)
class VersionFacts:
    version: str
    is_prerelease: bool
    tag: str
    release_name: str
    channel: Channel
    artifact_basename: str = ""
