import shutil
import subprocess
from types import SimpleNamespace

import pytest

from tagver.deriver import derive
from tagver.errors import DescribeError
from tagver.git import DESCRIBE_COMMAND, git_describe


def test_git_describe_runs_long_tag_describe_and_strips_output(tmp_path):
    seen = {}

    def runner(command, **kwargs):
        seen["command"] = command
        seen.update(kwargs)
        return SimpleNamespace(stdout="v1.0.0-3-gabc\n", returncode=0)

    assert git_describe(tmp_path, runner=runner) == "v1.0.0-3-gabc"
    assert seen["command"] == list(DESCRIBE_COMMAND)
    assert seen["cwd"] == str(tmp_path)
    assert seen["check"] is True


def test_git_describe_reports_missing_executable():
    def runner(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "git")

    with pytest.raises(DescribeError, match="Unable to run git"):
        git_describe(runner=runner)


def test_git_describe_reports_failed_command_with_stderr():
    def runner(command, **kwargs):
        raise subprocess.CalledProcessError(
            128, command, output="", stderr="fatal: No names found, cannot describe anything.\n"
        )

    with pytest.raises(DescribeError, match="status 128") as excinfo:
        git_describe(runner=runner)
    assert "No names found" in str(excinfo.value)
    assert excinfo.value.command == DESCRIBE_COMMAND


def test_git_describe_rejects_empty_output():
    def runner(command, **kwargs):
        return SimpleNamespace(stdout="  \n", returncode=0)

    with pytest.raises(DescribeError, match="no output"):
        git_describe(runner=runner)


def _git(repo, *args):
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=tagver",
            "-c",
            "user.email=tagver@example.invalid",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "tag.gpgsign=false",
            *args,
        ],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_derive_from_real_repository(tmp_path):
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "initial")
    _git(tmp_path, "tag", "v0.3.1-beta")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "second")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "third")

    description = git_describe(tmp_path)
    assert description.startswith("v0.3.1-beta-2-g")

    facts = derive(describe=lambda: git_describe(tmp_path))
    assert facts.version == "v0.3.3-beta"
    assert facts.release_name == "Beta v0.3.3-beta"


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_git_describe_fails_without_tags(tmp_path):
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "initial")

    with pytest.raises(DescribeError, match="git describe exited"):
        git_describe(tmp_path)
