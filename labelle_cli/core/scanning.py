"""Marker/quote scanning over semi-structured text.

Both the GitHub release payloads and ``project.labelle`` are read without a
real parser: find a known marker, then take the next ``"``-delimited string.
The scanner is forward-only; callers resume from ``QuotedValue.resume_at``
to walk successive occurrences without re-reading consumed text.

Behaviour on malformed input is part of the contract:

- marker absent                     -> ``None``
- no opening quote after the marker -> ``None``
- opening quote but no closing one  -> ``None``
- braces and other punctuation are not interpreted at all
"""

from __future__ import annotations

from typing import NamedTuple

_QUOTE = '"'


class QuotedValue(NamedTuple):
    """A quoted string located in a larger text.

    ``value_start``/``value_end`` delimit the characters between the quotes
    (so ``text[value_start:value_end] == value``); ``resume_at`` is the index
    just past the closing quote.
    """

    value: str
    value_start: int
    value_end: int

    @property
    def resume_at(self) -> int:
        return self.value_end + 1


def find_quoted_value(
    text: str,
    marker: str,
    start: int = 0,
    *,
    delimiter: str | None = None,
) -> QuotedValue | None:
    """Return the first quoted string following *marker* at or after *start*.

    When *delimiter* is given it must appear after the marker, and the
    opening quote is searched from the delimiter instead.
    """
    marker_pos = text.find(marker, start)
    if marker_pos < 0:
        return None

    search_from = marker_pos + len(marker)
    if delimiter is not None:
        delim_pos = text.find(delimiter, marker_pos)
        if delim_pos < 0:
            return None
        search_from = delim_pos

    open_quote = text.find(_QUOTE, search_from)
    if open_quote < 0:
        return None
    close_quote = text.find(_QUOTE, open_quote + 1)
    if close_quote < 0:
        return None

    return QuotedValue(
        value=text[open_quote + 1 : close_quote],
        value_start=open_quote + 1,
        value_end=close_quote,
    )


def iter_quoted_values(text: str, marker: str):
    """Yield every quoted value following successive *marker* occurrences.

    Scanning stops at the first marker that is not followed by a complete
    quoted string.
    """
    position = 0
    while True:
        found = find_quoted_value(text, marker, position)
        if found is None:
            return
        yield found
        position = found.resume_at
