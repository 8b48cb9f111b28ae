from typing import Optional, Sequence


TAG_FORMAT_HINT = "vMAJOR.MINOR.PATCH[-prerelease]"


class TagVerError(Exception):
    """Base tagver error."""


class InvalidTagFormat(TagVerError):
    """Raised when a describe string does not carry a semver-like tag."""

    def __init__(self, tag: str, *, description: Optional[str] = None):
        self.tag = tag
        self.description = description if description is not None else tag
        super().__init__(f"tag '{tag}' is not semver-like ({TAG_FORMAT_HINT}).")


class DescribeError(TagVerError):
    """Raised when the version-control describe query fails."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        stderr: str = "",
    ):
        self.command = tuple(command)
        self.stderr = stderr
        details = [message]
        if self.command:
            details.append(f"Command: {' '.join(self.command)}")
        if stderr.strip():
            details.append(f"Output: {stderr.strip()}")
        super().__init__("\n".join(details))


class OutputError(TagVerError):
    """Raised when release facts cannot be written to an output file."""
