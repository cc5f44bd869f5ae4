"""Unit tests for the confirmation gate and input sources."""

import io
from unittest.mock import MagicMock

import pytest

from featuresync.prompt import ScriptedInputSource, StdinInputSource, confirm


class TestConfirm:
    """Test cases for confirm()."""

    def test_non_interactive_declines_without_reading(self):
        """Test that a non-TTY source is never read."""
        source = ScriptedInputSource("yes", interactive=False)
        output = io.StringIO()

        assert confirm("Use this? ", source, output) is False
        assert source.reads == 0
        assert output.getvalue() == ""

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " Yes ", "yEs"])
    def test_affirmative_answers(self, answer):
        """Test case-insensitive y/yes confirm."""
        source = ScriptedInputSource(answer)

        assert confirm("Use this? ", source, io.StringIO()) is True
        assert source.reads == 1

    @pytest.mark.parametrize("answer", ["", "n", "no", "yeah", "ok", "y es"])
    def test_other_answers_decline(self, answer):
        """Test that anything else declines."""
        assert confirm("Use this? ", ScriptedInputSource(answer), io.StringIO()) is False

    def test_question_is_written_once(self):
        """Test the prompt text is shown exactly once, without a newline."""
        output = io.StringIO()

        confirm("Inferred feature file: plan.md. Use this? (y/N): ", ScriptedInputSource("n"), output)

        assert output.getvalue() == "Inferred feature file: plan.md. Use this? (y/N): "

    def test_end_of_input_declines(self):
        """Test that EOF on an interactive source declines."""
        source = MagicMock()
        source.isatty.return_value = True
        source.readline.return_value = ""

        assert confirm("Use this? ", source, io.StringIO()) is False
        source.readline.assert_called_once_with()


class TestStdinInputSource:
    """Test cases for StdinInputSource."""

    def test_wraps_given_stream(self):
        """Test reading from an explicit stream."""
        source = StdinInputSource(io.StringIO("yes\nno\n"))

        assert source.isatty() is False
        assert source.readline() == "yes\n"

    def test_closed_stream_is_not_interactive(self):
        """Test that a closed stream is treated as non-interactive."""
        stream = io.StringIO()
        stream.close()

        assert StdinInputSource(stream).isatty() is False

    def test_defaults_to_sys_stdin(self, monkeypatch):
        """Test that sys.stdin is looked up lazily."""
        fake = MagicMock()
        fake.isatty.return_value = True
        monkeypatch.setattr("sys.stdin", fake)

        assert StdinInputSource().isatty() is True
