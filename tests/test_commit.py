"""Tests for committing and pushing."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from gato.git import (
    GitError,
    commit_with_message,
    has_upstream,
    pick_remote,
    push_current_branch,
    resolve_push_args,
)


class TestCommitWithMessage:
    """Tests for commit_with_message function."""

    def test_commits_from_temp_file(self, mocker):
        """Test that the message is passed through a file that is removed afterwards."""
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            seen["content"] = Path(cmd[3]).read_text()
            return MagicMock(stdout="[main abc1234] Add feature\n", stderr="", returncode=0)

        mocker.patch("subprocess.run", side_effect=fake_run)

        output = commit_with_message("Add feature\n\n- one\n", Path("/repo"))

        assert output == "[main abc1234] Add feature"
        assert seen["cmd"][:3] == ["git", "commit", "-F"]
        assert Path(seen["cmd"][3]).name.startswith("gato.")
        assert seen["content"] == "Add feature\n\n- one\n"
        assert not Path(seen["cmd"][3]).exists()

    def test_temp_file_removed_on_failure(self, mocker):
        """Test cleanup when git commit fails."""
        paths = []

        def fake_run(cmd, **kwargs):
            paths.append(Path(cmd[3]))
            raise subprocess.CalledProcessError(1, cmd, stderr="nothing to commit")

        mocker.patch("subprocess.run", side_effect=fake_run)

        with pytest.raises(GitError):
            commit_with_message("Subject\n\n- b\n")

        assert not paths[0].exists()


def _exit_codes(mocker, codes: dict, remotes: str = ""):
    """Patch git so that each query returns a fixed exit code."""

    def fake_run(cmd, **kwargs):
        args = tuple(cmd[1:])
        if args == ("remote",):
            return MagicMock(stdout=remotes, stderr="", returncode=0)
        return MagicMock(stdout="", stderr="", returncode=codes.get(args[:2], 0))

    return mocker.patch("subprocess.run", side_effect=fake_run)


class TestPushTarget:
    """Tests for push target resolution."""

    def test_has_upstream(self, mocker):
        _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 0})
        assert has_upstream() is True

    def test_no_upstream(self, mocker):
        _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 128})
        assert has_upstream() is False

    def test_pick_origin(self, mocker):
        _exit_codes(mocker, {("remote", "get-url"): 0}, remotes="upstream\norigin\n")
        assert pick_remote() == "origin"

    def test_pick_first_remote_without_origin(self, mocker):
        _exit_codes(mocker, {("remote", "get-url"): 2}, remotes="upstream\nfork\n")
        assert pick_remote() == "upstream"

    def test_pick_none(self, mocker):
        _exit_codes(mocker, {("remote", "get-url"): 2}, remotes="")
        assert pick_remote() is None

    def test_plain_push_with_upstream(self, mocker):
        _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 0})
        assert resolve_push_args() == ["push"]

    def test_set_upstream_push(self, mocker):
        _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 128, ("remote", "get-url"): 0})
        assert resolve_push_args() == ["push", "-u", "origin", "HEAD"]

    def test_no_remote_raises(self, mocker):
        _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 128, ("remote", "get-url"): 2})

        with pytest.raises(GitError) as exc_info:
            resolve_push_args()

        assert "no git remote configured" in str(exc_info.value)

    def test_push_current_branch(self, mocker):
        mock_run = _exit_codes(mocker, {("rev-parse", "--abbrev-ref"): 128, ("remote", "get-url"): 0})

        push_current_branch(Path("/repo"))

        assert mock_run.call_args[0][0] == ["git", "push", "-u", "origin", "HEAD"]
        assert mock_run.call_args[1]["cwd"] == Path("/repo")
