"""Interactive confirmation for an inferred feature file."""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


class InputSource(Protocol):
    """Where the confirmation answer comes from."""

    def isatty(self) -> bool:
        ...

    def readline(self) -> str:
        ...


class StdinInputSource:
    """Reads the answer from the process's standard input."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    def isatty(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            # Closed or detached stdin counts as non-interactive.
            return False

    def readline(self) -> str:
        return self.stream.readline()


class ScriptedInputSource:
    """Answers with a fixed line, for callers that cannot prompt."""

    def __init__(self, answer: str = "", *, interactive: bool = True) -> None:
        self.answer = answer
        self.interactive = interactive
        self.reads = 0

    def isatty(self) -> bool:
        return self.interactive

    def readline(self) -> str:
        self.reads += 1
        return self.answer + "\n"


def confirm(question: str, source: InputSource, output: Optional[TextIO] = None) -> bool:
    """Ask a yes/no question once.

    Returns False without reading when ``source`` is not interactive.
    Only ``y`` or ``yes`` (any case) confirm; everything else, including
    an empty line or end of input, declines.
    """
    if not source.isatty():
        return False

    out = output if output is not None else sys.stdout
    out.write(question)
    out.flush()

    answer = source.readline()
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
