"""Boundary-aware math delimiter scanner.

Partitions one literal text unit into alternating literal and math segments.
The rules follow GitHub's handling of dollar signs closely enough that
ordinary currency text survives untouched:

Block math ``$$...$$``
    Opener and closer in the same unit form a display span, newlines
    included. An opener with no closer ends the scan with an OpenBlock
    holding the rest of the unit; the processor keeps capturing from there.

Inline math ``$...$``
    The opener must be followed by a non-whitespace character. The closer
    is the next ``$`` that is not followed by another ``$`` and not preceded
    by whitespace. Without a closer the ``$`` is literal.

Boundaries
    An accepted inline span must also sit at a word boundary: the character
    before the opener is absent, whitespace, or anything but an ASCII letter
    or digit; the character after the closer is absent, whitespace, one of
    CLOSER_FOLLOWERS, or non-ASCII. A span failing either test is kept as
    literal text, delimiters included, which is what keeps ``$5/month``
    as currency.

Example:
    >>> scan_math("If $a=1$ then")
    [Literal(text='If '), MathSpan(content='a=1', display=False, start=3, end=8), Literal(text=' then')]
"""

from __future__ import annotations

from dataclasses import dataclass

DOLLAR = "$"
BLOCK_DELIMITER = "$$"

# Characters allowed directly after an inline closer
CLOSER_FOLLOWERS: frozenset[str] = frozenset(".,;:!?)]}\"'/")


@dataclass(frozen=True, slots=True)
class Literal:
    """Text outside any math span, emitted verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class MathSpan:
    """A delimited math region.

    start and end are offsets into the scanned unit covering the
    delimiters, so text[start:end] is the exact source consumed.
    """

    content: str
    display: bool
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class OpenBlock:
    """A ``$$`` opener whose closer is not in this unit.

    remainder is everything after the opener, the start of a display math
    capture that continues in later events.
    """

    remainder: str
    start: int


Segment = Literal | MathSpan | OpenBlock


def valid_opening_boundary(before: str | None) -> bool:
    """Check the character immediately before an inline opener."""
    if before is None or before.isspace():
        return True
    return not (before.isascii() and before.isalnum())


def valid_closing_boundary(after: str | None) -> bool:
    """Check the character immediately after an inline closer."""
    if after is None or after.isspace():
        return True
    return after in CLOSER_FOLLOWERS or not after.isascii()


def find_inline_closer(text: str, opener: int) -> int | None:
    """Find the closing ``$`` for an inline opener at index opener.

    Returns None if the opener is not followed by non-whitespace or no
    valid closer exists in text.
    """
    n = len(text)
    if opener + 1 >= n or text[opener + 1].isspace():
        return None
    j = opener + 1
    while True:
        j = text.find(DOLLAR, j)
        if j == -1:
            return None
        followed_by_dollar = j + 1 < n and text[j + 1] == DOLLAR
        if not followed_by_dollar and not text[j - 1].isspace():
            return j
        j += 1


def scan_math(text: str) -> list[Segment]:
    """Split a text unit into literal and math segments.

    Args:
        text: One literal text unit (a single Text event)

    Returns:
        Segments in source order. Literal segments concatenate with the
        source of the math segments to reproduce text exactly. An OpenBlock,
        if present, is always last.
    """
    segments: list[Segment] = []
    n = len(text)
    last = 0
    i = 0

    def flush(until: int) -> None:
        if until > last:
            segments.append(Literal(text[last:until]))

    while i < n:
        if text[i] != DOLLAR:
            i += 1
            continue

        if text.startswith(BLOCK_DELIMITER, i):
            flush(i)
            close = text.find(BLOCK_DELIMITER, i + 2)
            if close == -1:
                segments.append(OpenBlock(text[i + 2 :], i))
                return segments
            segments.append(MathSpan(text[i + 2 : close], True, i, close + 2))
            last = i = close + 2
            continue

        close = find_inline_closer(text, i)
        if close is None:
            i += 1
            continue

        before = text[i - 1] if i > 0 else None
        after = text[close + 1] if close + 1 < n else None
        if valid_opening_boundary(before) and valid_closing_boundary(after):
            flush(i)
            segments.append(MathSpan(text[i + 1 : close], False, i, close + 1))
            last = close + 1
        # A rejected span stays in the pending literal run
        i = close + 1

    flush(n)
    return segments
