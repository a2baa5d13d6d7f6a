"""Tests for gitflow.git.runner."""

import subprocess

from conftest import fail, ok

from gitflow.git.runner import DEBUG, QUIET, SHOW, Git, GitResult


class TestGitResult:
    def test_lines_skips_blank(self):
        result = GitResult(output="a\n\n  \nb", success=True)
        assert result.lines() == ["a", "b"]

    def test_lines_empty(self):
        assert GitResult(output="", success=True).lines() == []


class TestRun:
    def test_builds_command(self, mock_subprocess):
        Git().run("rev-parse", "HEAD")
        args, kwargs = mock_subprocess.call_args
        assert args[0] == ["git", "rev-parse", "HEAD"]
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True

    def test_cwd_passed(self, mock_subprocess):
        Git(cwd="/tmp/repo").run("status")
        assert mock_subprocess.call_args.kwargs["cwd"] == "/tmp/repo"

    def test_output_stripped(self, mock_subprocess):
        mock_subprocess.return_value = ok("develop\n")
        result = Git().run("branch", "--show-current")
        assert result.output == "develop"
        assert result.success is True

    def test_failure_does_not_raise(self, mock_subprocess):
        mock_subprocess.return_value = fail("fatal: bad revision", returncode=128)
        result = Git().run("rev-parse", "nope")
        assert result.success is False
        assert result.returncode == 128
        assert result.stderr == "fatal: bad revision"

    def test_output_helper(self, mock_subprocess):
        mock_subprocess.return_value = ok("abc123\n")
        assert Git().output("rev-parse", "HEAD") == "abc123"

    def test_succeeds_helper(self, mock_subprocess):
        mock_subprocess.return_value = fail()
        assert Git().succeeds("merge-base", "--is-ancestor", "a", "b") is False


class TestVerbosity:
    def test_quiet_prints_nothing(self, mock_subprocess, capsys):
        Git(verbosity=QUIET).run("status")
        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""

    def test_show_echoes_command(self, mock_subprocess, capsys):
        Git(verbosity=SHOW).run("checkout", "develop")
        err = capsys.readouterr().err
        assert "git checkout develop" in err
        assert "[0]" not in err

    def test_debug_echoes_call_site_output_and_status(self, mock_subprocess, capsys):
        mock_subprocess.return_value = subprocess.CompletedProcess(
            [], 1, stdout="some output\n", stderr="some error\n"
        )
        Git(verbosity=DEBUG).run("merge", "feature/x")
        err = capsys.readouterr().err
        assert "git merge feature/x" in err
        assert "test_git_runner:" in err
        assert "some output" in err
        assert "some error" in err
        assert "[1]" in err

    def test_trace_never_on_stdout(self, mock_subprocess, capsys):
        Git(verbosity=DEBUG).run("status")
        assert capsys.readouterr().out == ""
