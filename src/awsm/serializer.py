"""Serialize an event sequence to HTML with markdown-it's renderer.

Events are turned back into markdown-it tokens. Consecutive inline-level
tokens are regrouped under an ``inline`` container token, the shape
RendererHTML expects between block tokens, so paragraph spacing and
tight-list handling come out exactly as markdown-it would produce them.
"""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from typing import Any

from markdown_it.token import Token

from awsm.errors import RenderError
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
from awsm.parser import get_parser


def event_to_token(event: Event) -> Token:
    """Convert one event back into a markdown-it token.

    Raises:
        RenderError: for code block events, which the processor must have
            consumed before serialization
    """
    match event:
        case Passthrough(token=token):
            return token
        case Text(content=content):
            return Token("text", "", 0, content=content)
        case SoftBreak():
            return Token("softbreak", "br", 0)
        case HardBreak():
            return Token("hardbreak", "br", 0)
        case RawMarkup(html=html, block=True):
            return Token("html_block", "", 0, content=html, block=True)
        case RawMarkup(html=html):
            return Token("html_inline", "", 0, content=html)
        case StartCodeBlock() | EndCodeBlock():
            raise RenderError(f"Unprocessed code block event: {event!r}")
    raise RenderError(f"Unknown event: {event!r}")


def build_tokens(events: Iterable[Event]) -> list[Token]:
    """Convert events to block tokens, regrouping inline runs."""
    tokens: list[Token] = []
    pending: list[Token] = []

    def flush_inline() -> None:
        if pending:
            tokens.append(Token("inline", "", 0, children=list(pending), block=True))
            pending.clear()

    for event in events:
        token = event_to_token(event)
        if token.block:
            flush_inline()
            tokens.append(token)
        else:
            pending.append(token)
    flush_inline()
    return tokens


def serialize(events: Iterable[Event], env: MutableMapping[str, Any] | None = None) -> str:
    """Render events to an HTML string.

    Args:
        events: Transformed event sequence
        env: The environment the source was parsed with (footnotes live here)

    Returns:
        HTML fragment
    """
    md = get_parser()
    return md.renderer.render(build_tokens(events), md.options, env if env is not None else {})
