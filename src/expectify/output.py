"""Process-wide stdout redirection used while a suite runs."""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO


class _Discard(io.TextIOBase):
    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return len(s)


class OutputCapture:
    """Swaps ``sys.stdout`` for a silent sink for the length of a run.

    Test bodies write to the silent sink unless ``verbose`` is set, in which
    case they see the real stream.  Reports are always written to
    :attr:`stream`, the stdout that was in place when :meth:`silence` ran.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.real: TextIO | None = None
        self.silent: TextIO = _Discard()

    @property
    def stream(self) -> TextIO:
        return self.real if self.real is not None else sys.stdout

    def silence(self) -> None:
        if self.real is None:
            self.real = sys.stdout
        sys.stdout = self.silent

    def restore(self) -> None:
        if self.real is not None:
            sys.stdout = self.real
            self.real = None

    @contextmanager
    def test_body(self) -> Iterator[None]:
        if self.verbose and self.real is not None:
            sys.stdout = self.real
        try:
            yield
        finally:
            if self.real is not None:
                sys.stdout = self.silent
