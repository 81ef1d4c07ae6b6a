"""Event types for the awsm event stream.

The parser adapter flattens markdown-it's nested token list into a linear
sequence of these events. The processor consumes that sequence and emits a
new one in which code blocks and math spans are replaced by RawMarkup.

Only the events the processor inspects get their own type. Everything else
(headings, emphasis, links, tables, footnotes, task-list markers) travels as
Passthrough carrying the original markdown-it Token, forwarded unchanged.

Thread Safety:
Events are frozen and safe to share across threads. Passthrough holds a
reference to a markdown-it Token owned by a single render() call.

"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from markdown_it.token import Token


@dataclass(frozen=True, slots=True)
class StartCodeBlock:
    """Opening of a fenced or indented code block.

    language is the first word of the fence info string, or None for
    indented blocks and fences without an info string.
    """

    language: str | None = None


@dataclass(frozen=True, slots=True)
class EndCodeBlock:
    """Closing of the innermost open code block."""


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text. Escaped by the serializer, never interpreted as markup."""

    content: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """Line ending inside a paragraph."""


@dataclass(frozen=True, slots=True)
class HardBreak:
    """Forced line break (trailing backslash or two trailing spaces)."""


@dataclass(frozen=True, slots=True)
class RawMarkup:
    """Pre-rendered HTML emitted verbatim.

    block selects between a block-level fragment (its own line in the
    output) and an inline one (inside the surrounding paragraph).
    """

    html: str
    block: bool = False


@dataclass(frozen=True, slots=True)
class Passthrough:
    """Any other markdown-it token, forwarded unchanged."""

    token: "Token"

    @property
    def is_block(self) -> bool:
        return bool(self.token.block)


Event = StartCodeBlock | EndCodeBlock | Text | SoftBreak | HardBreak | RawMarkup | Passthrough


__all__ = [
    "EndCodeBlock",
    "Event",
    "HardBreak",
    "Passthrough",
    "RawMarkup",
    "SoftBreak",
    "StartCodeBlock",
    "Text",
]
