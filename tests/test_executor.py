"""Tests for running external programs"""

from mayactl.installer import EXIT_NOT_STARTED, SubprocessRunner


class TestSubprocessRunner:
    """Test the subprocess backed runner"""

    def test_first_line_captured(self, console):
        """Captured output is the first stdout line, all lines are echoed"""
        result = SubprocessRunner(console).run(
            "sh", ["-c", "echo ' 10.0.0.5 '; echo second"], capture=True
        )

        assert result.ok
        assert result.output == "10.0.0.5"
        output = console.file.getvalue()
        assert "10.0.0.5" in output
        assert "second" in output

    def test_no_capture_by_default(self, console):
        """Output is only echoed unless capture is requested"""
        result = SubprocessRunner(console).run("sh", ["-c", "echo hello"])
        assert result.output == ""
        assert "hello" in console.file.getvalue()

    def test_exit_status_propagated(self, console):
        """Non-zero status comes back unchanged"""
        result = SubprocessRunner(console).run("sh", ["-c", "exit 7"])
        assert result.exit_status == 7
        assert not result.ok

    def test_missing_program(self, console):
        """A program that cannot start gets a distinct status"""
        result = SubprocessRunner(console).run("/nonexistent/maya-test-program")
        assert result.exit_status == EXIT_NOT_STARTED

    def test_signal_death(self, console):
        """Killed programs report 128 plus the signal number"""
        result = SubprocessRunner(console).run("sh", ["-c", "kill -TERM $$"])
        assert result.exit_status == 128 + 15

    def test_env_layered_on_parent(self, console, monkeypatch):
        """Extra variables are added to the inherited environment"""
        monkeypatch.setenv("MAYA_TEST_PARENT", "kept")
        result = SubprocessRunner(console).run(
            "sh",
            ["-c", 'echo "$MAYA_SERVER_COUNT-$MAYA_TEST_PARENT"'],
            capture=True,
            env={"MAYA_SERVER_COUNT": "3"},
        )
        assert result.output == "3-kept"

    def test_empty_output_captures_nothing(self, console):
        """A silent program captures an empty string"""
        result = SubprocessRunner(console).run("sh", ["-c", "true"], capture=True)
        assert result.output == ""

    def test_undecodable_output(self, console):
        """Bytes that are not UTF-8 are replaced and the status still returned"""
        result = SubprocessRunner(console).run(
            "sh", ["-c", "printf '\\377\\376bad\\n'; exit 3"], capture=True
        )

        assert result.exit_status == 3
        assert result.output.endswith("bad")
        assert "bad" in console.file.getvalue()
