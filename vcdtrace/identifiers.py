"""Generation of compact VCD variable identifiers."""

from __future__ import annotations

from collections.abc import Iterator

FIRST_CHAR = "!"
LAST_CHAR = "z"
MAX_LENGTH = 16

_FIRST = ord(FIRST_CHAR)
_RADIX = ord(LAST_CHAR) - _FIRST + 1


class IdentifierGenerator(Iterator[str]):
    """Produce unique VCD identifiers in sequence.

    Identifiers are built from the printable characters ``!`` to ``z``.
    Every combination of a given length is used before a new column is
    added. Once the identifier reaches ``MAX_LENGTH`` characters the
    generator keeps returning that identifier.
    """

    def __init__(self) -> None:
        self._digits: list[int] = []

    def _current(self) -> str:
        return "".join(chr(_FIRST + digit) for digit in self._digits)

    def next(self) -> str:
        """Return the next identifier."""
        if len(self._digits) == MAX_LENGTH:
            return self._current()
        if not self._digits:
            self._digits.append(0)
            return self._current()
        for position in reversed(range(len(self._digits))):
            if self._digits[position] == _RADIX - 1:
                self._digits[position] = 0
            else:
                self._digits[position] += 1
                return self._current()
        # Every column wrapped around: add a new one.
        self._digits.append(0)
        return self._current()

    def __iter__(self) -> IdentifierGenerator:
        return self

    def __next__(self) -> str:
        return self.next()