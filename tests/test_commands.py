"""Tests for CommandRunner."""

import sys

import pytest

from hostreport.commands import DEFAULT_TIMEOUT, CommandRunner
from hostreport.errors import CommandExecutionError


class TestCommandRunner:
    """Tests for running external commands."""

    def test_default_timeout(self):
        """Test runner is bounded by default."""
        assert CommandRunner().timeout == DEFAULT_TIMEOUT

    def test_returns_stdout(self):
        """Test stdout is returned untrimmed."""
        runner = CommandRunner(timeout=10.0)

        output = runner.run([sys.executable, "-c", "print('node-7')"])

        assert output.strip() == "node-7"
        assert output.endswith("\n")

    def test_accepts_string_command(self):
        """Test string commands are split without a shell."""
        runner = CommandRunner(timeout=10.0)

        output = runner.run(f"{sys.executable} -c 'print(1 + 1)'")

        assert output.strip() == "2"

    def test_missing_executable(self):
        """Test a command that cannot be launched raises CommandExecutionError."""
        runner = CommandRunner(timeout=10.0)

        with pytest.raises(CommandExecutionError) as excinfo:
            runner.run(["/nonexistent/hostreport-test-binary"])

        assert isinstance(excinfo.value.__cause__, OSError)
        assert "hostreport-test-binary" in excinfo.value.command

    def test_nonzero_exit(self):
        """Test a failing command raises CommandExecutionError."""
        runner = CommandRunner(timeout=10.0)

        with pytest.raises(CommandExecutionError, match="exited with status 3"):
            runner.run([sys.executable, "-c", "import sys; sys.exit(3)"])

    def test_timeout(self):
        """Test a hung command is abandoned after the timeout."""
        runner = CommandRunner(timeout=0.2)

        with pytest.raises(CommandExecutionError, match="timed out"):
            runner.run([sys.executable, "-c", "import time; time.sleep(10)"])

    def test_undecodable_output(self):
        """Test non UTF-8 output raises CommandExecutionError."""
        runner = CommandRunner(timeout=10.0)

        with pytest.raises(CommandExecutionError, match="UTF-8"):
            runner.run([sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'\\xff\\xfe')"])
