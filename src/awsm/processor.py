"""Event stream state machine.

Consumes the flat event sequence produced by awsm.parser and emits an
equivalent sequence in which code blocks and math regions are replaced by
RawMarkup. The machine is in exactly one of three modes at any time, each
carrying its own buffer:

    Normal
    CapturingCode(language, buffer)
    CapturingDisplayMath(buffer, remainder, held)

Priority per event:
    1. CapturingCode: Text and breaks append to the buffer; EndCodeBlock
       flushes it through the highlighter (or the math renderer for math
       fences). Everything else is dropped, so a ``$`` inside code is never
       seen by the math scanner.
    2. CapturingDisplayMath: Text is searched for the closing ``$$``; the
       math before it is flushed and the text after it is processed again
       in Normal mode. Breaks append a newline. Inline structure inside the
       formula is dropped, except tags whose partner lies outside it.
       A block-level event means the block ended without a closer: the
       opener is put back as literal text, the held events are replayed in
       Normal mode, and the event is handled normally.
    3. Normal: StartCodeBlock enters code capture; Text goes through the
       math scanner; everything else passes through.

Thread Safety:
    A StreamProcessor owns all its state and is used for a single pass.
    process_events() creates a fresh one per call.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from awsm.config import get_render_config
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
from awsm.highlighting import highlight
from awsm.mathml import render_math
from awsm.scanner import BLOCK_DELIMITER, Literal, MathSpan, OpenBlock, scan_math
from awsm.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class Normal:
    """No capture in progress."""


@dataclass(slots=True)
class CapturingCode:
    """Inside a code block; buffer collects its literal lines."""

    language: str | None
    buffer: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CapturingDisplayMath:
    """Inside an unclosed ``$$`` block.

    buffer collects the LaTeX so far. remainder is the text that followed
    the opener in its own unit and held keeps every later event, so an
    abandoned capture can be put back exactly as it arrived.
    """

    buffer: list[str] = field(default_factory=list)
    remainder: str = ""
    held: list[Event] = field(default_factory=list)


ProcessorState = Normal | CapturingCode | CapturingDisplayMath


def _breaks_math_capture(event: Event) -> bool:
    # Block-level events end the paragraph a $$ opener was found in
    match event:
        case StartCodeBlock() | EndCodeBlock():
            return True
        case RawMarkup(block=block):
            return block
        case Passthrough():
            return event.is_block
    return False


def unpaired_tags(events: list[Event]) -> tuple[list[Event], list[Event]]:
    """Split held events into unmatched closing and opening tag events.

    Returns (closers, openers) in source order. A closer has its opener
    before the capture; an opener has its closer after it.
    """
    closers: list[Event] = []
    openers: list[Event] = []
    for event in events:
        match event:
            case Passthrough(token=token) if token.nesting == 1:
                openers.append(event)
            case Passthrough(token=token) if token.nesting == -1:
                if openers:
                    openers.pop()
                else:
                    closers.append(event)
    return closers, openers


class StreamProcessor:
    """Single-pass state machine over an event sequence.

    Usage:
        >>> processor = StreamProcessor()
        >>> out = []
        >>> for event in events:
        ...     out.extend(processor.feed(event))
        >>> out.extend(processor.finish())

    feed() and finish() return the events to emit for that step.
    """

    __slots__ = ("_config", "_out", "state")

    def __init__(self) -> None:
        self._config = get_render_config()
        self.state: ProcessorState = Normal()
        self._out: list[Event] = []

    def feed(self, event: Event) -> list[Event]:
        """Process one input event."""
        self._dispatch(event)
        return self._drain()

    def finish(self) -> list[Event]:
        """Flush any capture still open at the end of the stream."""
        match self.state:
            case CapturingCode() as state:
                self._flush_code(state)
            case CapturingDisplayMath() as state:
                self._abandon_math(state)
        return self._drain()

    def _drain(self) -> list[Event]:
        out = self._out
        self._out = []
        return out

    def _dispatch(self, event: Event) -> None:
        match self.state:
            case CapturingCode():
                self._handle_code(self.state, event)
            case CapturingDisplayMath():
                self._handle_math(self.state, event)
            case Normal():
                self._handle_normal(event)

    # -- CapturingCode -------------------------------------------------------

    def _handle_code(self, state: CapturingCode, event: Event) -> None:
        match event:
            case Text(content=content):
                state.buffer.append(content)
            case SoftBreak() | HardBreak():
                state.buffer.append("\n")
            case EndCodeBlock():
                self._flush_code(state)
            case _:
                # Code blocks hold literal text only
                pass

    def _flush_code(self, state: CapturingCode) -> None:
        code = "".join(state.buffer)
        self.state = Normal()

        if self._config.math_enabled and state.language in self._config.math_fence_languages:
            html = render_math(code, display=True)
        else:
            html = highlight(code, state.language)
        self._out.append(RawMarkup(html + "\n", block=True))

    # -- CapturingDisplayMath ------------------------------------------------

    def _handle_math(self, state: CapturingDisplayMath, event: Event) -> None:
        match event:
            case Text(content=content):
                close = content.find(BLOCK_DELIMITER)
                if close == -1:
                    state.buffer.append(content)
                    state.held.append(event)
                    return
                state.buffer.append(content[:close])
                self._close_math(state)
                rest = content[close + len(BLOCK_DELIMITER) :]
                if rest:
                    self._handle_normal(Text(rest))
            case SoftBreak() | HardBreak():
                state.buffer.append("\n")
                state.held.append(event)
            case _ if _breaks_math_capture(event):
                self._abandon_math(state)
                self._handle_normal(event)
            case _:
                # Inline structure inside a formula is not representable
                state.held.append(event)

    def _close_math(self, state: CapturingDisplayMath) -> None:
        # Tags opened before the formula close before it, tags closed after
        # it open after it
        closers, openers = unpaired_tags(state.held)
        self.state = Normal()
        self._out.extend(closers)
        self._out.append(RawMarkup(render_math("".join(state.buffer), display=True)))
        self._out.extend(openers)

    def _abandon_math(self, state: CapturingDisplayMath) -> None:
        logger.debug("Unclosed display math block kept as text: %r", "".join(state.buffer))
        self.state = Normal()
        self._out.append(Text(BLOCK_DELIMITER + state.remainder))
        for event in state.held:
            self._handle_normal(event)

    # -- Normal --------------------------------------------------------------

    def _handle_normal(self, event: Event) -> None:
        match event:
            case StartCodeBlock(language=language):
                self.state = CapturingCode(language)
            case Text(content=content) if self._config.math_enabled:
                self._scan_text(content)
            case _:
                self._out.append(event)

    def _scan_text(self, content: str) -> None:
        for segment in scan_math(content):
            match segment:
                case Literal(text=text):
                    self._out.append(Text(text))
                case MathSpan(content=latex, display=display):
                    self._out.append(RawMarkup(render_math(latex, display=display)))
                case OpenBlock(remainder=remainder):
                    self.state = CapturingDisplayMath(
                        [remainder] if remainder else [], remainder=remainder
                    )


def process_events(events: Iterable[Event]) -> Iterator[Event]:
    """Transform an event sequence, rendering code blocks and math.

    Args:
        events: Events from awsm.parser.iter_events()

    Yields:
        The transformed sequence, ready for awsm.serializer
    """
    processor = StreamProcessor()
    for event in events:
        yield from processor.feed(event)
    yield from processor.finish()
