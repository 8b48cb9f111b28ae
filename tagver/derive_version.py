#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from tagver.deriver import OUTPUT_FORMATS, derive
from tagver.errors import TagVerError
from tagver.exporter import append_github_output, write_facts
from tagver.git import git_describe


ARTIFACT_BASENAME_ENV = "ARTIFACT_BASENAME"
GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagver",
        description=(
            "Derive a release version from a `git describe --tags --long` string "
            "by bumping the tag's patch number by the commit count."
        ),
    )
    parser.add_argument(
        "description",
        nargs="?",
        default=None,
        help=(
            "Describe string shaped <tag>-<commits>-g<sha>. "
            "Defaults to the output of `git describe --tags --long`."
        ),
    )
    parser.add_argument(
        "--repo",
        default=None,
        help="Repository directory queried when no describe string is given.",
    )
    parser.add_argument(
        "--artifact-basename",
        default=None,
        help=f"Artifact basename to pass through. Defaults to ${ARTIFACT_BASENAME_ENV}.",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        choices=OUTPUT_FORMATS,
        default="lines",
        help="Output format written to stdout.",
    )
    parser.add_argument(
        "--github-output",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help=(
            "Also append key=value lines to PATH "
            f"(defaults to ${GITHUB_OUTPUT_ENV} when PATH is omitted)."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    env = os.environ if environ is None else environ

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    github_output = None
    if args.github_output is not None:
        github_output = args.github_output or env.get(GITHUB_OUTPUT_ENV, "")
        if not github_output:
            parser.error(f"--github-output needs a PATH or ${GITHUB_OUTPUT_ENV}")

    artifact_basename = args.artifact_basename
    if artifact_basename is None:
        artifact_basename = env.get(ARTIFACT_BASENAME_ENV, "")

    try:
        facts = derive(
            args.description,
            artifact_basename,
            describe=lambda: git_describe(args.repo),
        )
        logger.debug("Derived %s on channel %s", facts.version, facts.channel.value)
        if github_output:
            append_github_output(facts, github_output)
    except TagVerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    write_facts(facts, sys.stdout, args.fmt)
    return 0


if __name__ == "__main__":
    sys.exit(main())
