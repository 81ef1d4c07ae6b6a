"""markdown-it parser setup and token-to-event flattening.

The parser is configured once with the four GFM-style extensions awsm
supports (tables, footnotes, strikethrough, task lists) and raw HTML
passthrough. It is built lazily on first use and never reconfigured.

markdown-it returns block tokens whose ``inline`` tokens carry the inline
children. iter_events() walks that structure depth-first and yields a flat
event sequence, so the processor never needs to know about nesting.

Thread Safety:
    get_parser() builds the shared MarkdownIt instance under a lock and
    warms its rule caches before publishing it. After that it is only read;
    every parse() call creates its own state and token list.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator, MutableMapping
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

from awsm.events import (
    EndCodeBlock,
    Event,
    HardBreak,
    Passthrough,
    RawMarkup,
    SoftBreak,
    StartCodeBlock,
    Text,
)

_parser: MarkdownIt | None = None
_parser_lock = threading.Lock()


def create_parser() -> MarkdownIt:
    """Create a MarkdownIt instance with the supported extensions enabled."""
    md = MarkdownIt("commonmark", {"html": True})
    md.enable(["table", "strikethrough"])
    md.use(footnote_plugin)
    md.use(tasklists_plugin)
    return md


def get_parser() -> MarkdownIt:
    """Get the shared parser, building it on first access.

    At most one build runs even under concurrent first access; every caller
    observes the same instance.
    """
    global _parser
    parser = _parser
    if parser is not None:
        return parser
    with _parser_lock:
        if _parser is None:
            md = create_parser()
            # Compile rule chains now so later parses never mutate the instance
            md.parse("x *y*")
            _parser = md
        return _parser


def parse_tokens(source: str, env: MutableMapping[str, Any] | None = None) -> list[Token]:
    """Parse Markdown source into markdown-it block tokens.

    Args:
        source: Markdown source text
        env: Environment shared with the renderer (footnotes are stored here)

    Returns:
        Block-level token list with inline children attached
    """
    return get_parser().parse(source, env if env is not None else {})


def fence_language(info: str) -> str | None:
    """Extract the language token from a fence info string.

    Decodes entities and backslash escapes, then takes the first word.
    Returns None when the info string is blank.
    """
    info = unescapeAll(info).strip() if info else ""
    if not info:
        return None
    return info.split()[0]


def iter_events(tokens: Iterable[Token]) -> Iterator[Event]:
    """Flatten markdown-it tokens into a linear event sequence.

    Args:
        tokens: Block-level tokens as returned by parse_tokens()

    Yields:
        Events in document order
    """
    for token in tokens:
        match token.type:
            case "inline":
                yield from _iter_inline(token.children or ())
            case "fence":
                yield StartCodeBlock(fence_language(token.info))
                yield from _code_lines(token.content)
                yield EndCodeBlock()
            case "code_block":
                yield StartCodeBlock(None)
                yield from _code_lines(token.content)
                yield EndCodeBlock()
            case "html_block":
                yield RawMarkup(token.content, block=True)
            case _:
                yield Passthrough(token)


def _iter_inline(children: Iterable[Token]) -> Iterator[Event]:
    for child in children:
        match child.type:
            case "text":
                yield Text(child.content)
            case "softbreak":
                yield SoftBreak()
            case "hardbreak":
                yield HardBreak()
            case "html_inline":
                yield RawMarkup(child.content, block=False)
            case _:
                yield Passthrough(child)


def _code_lines(content: str) -> Iterator[Text]:
    # The parser delivers code one line per event; the processor rejoins them
    for line in content.splitlines(keepends=True):
        yield Text(line)
