"""Tests for the yes/no confirmation gate."""

from unittest.mock import Mock

import pytest

from vibe_sessions.confirmation import ConfirmationGate


def gate_answering(answer):
    console = Mock()
    if isinstance(answer, BaseException):
        console.input.side_effect = answer
    else:
        console.input.return_value = answer
    return ConfirmationGate(console), console


class TestConfirmationGate:
    @pytest.mark.parametrize("answer", ["y", "Y", "yes", " YES "])
    def test_explicit_yes_proceeds(self, answer):
        gate, _ = gate_answering(answer)
        assert gate.confirm("Delete anyway?") is True

    @pytest.mark.parametrize("answer", ["", "n", "no", "maybe", "yy"])
    def test_anything_else_declines(self, answer):
        gate, _ = gate_answering(answer)
        assert gate.confirm("Delete anyway?") is False

    @pytest.mark.parametrize("error", [EOFError(), KeyboardInterrupt()])
    def test_interrupted_input_declines(self, error):
        gate, _ = gate_answering(error)
        assert gate.confirm("Delete anyway?") is False

    def test_prompt_and_details(self):
        gate, console = gate_answering("n")
        gate.confirm("Delete anyway?", "  • claude/a (1 modified, 0 untracked, 0 ahead)")

        console.print.assert_any_call("  • claude/a (1 modified, 0 untracked, 0 ahead)")
        prompt = console.input.call_args[0][0]
        assert prompt.endswith("Delete anyway? [y/N] ")
