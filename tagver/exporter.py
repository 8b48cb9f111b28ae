import logging
from pathlib import Path
from typing import TextIO, Union

from tagver.deriver import render_facts
from tagver.errors import OutputError
from tagver.model import VersionFacts

logger = logging.getLogger(__name__)


def write_facts(facts: VersionFacts, stream: TextIO, fmt: str = "lines") -> None:
    """Write rendered facts to ``stream``."""
    stream.write(render_facts(facts, fmt))


def append_github_output(facts: VersionFacts, path: Union[str, Path]) -> Path:
    """Append ``key=value`` lines to a CI step output file such as ``$GITHUB_OUTPUT``.

    Raises:
        OutputError: If the file cannot be created or appended to.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as handle:
            handle.write(render_facts(facts, "lines"))
    except OSError as exc:
        raise OutputError(f"Unable to append release facts to {target}: {exc}") from exc
    logger.debug("Appended release facts to %s", target)
    return target
