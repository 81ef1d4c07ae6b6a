"""
awsm — Markdown to HTML with highlighted code and MathML math

Parses Markdown with markdown-it (tables, footnotes, strikethrough, task
lists), highlights fenced code blocks with Pygments and renders ``$inline$``
and ``$$display$$`` LaTeX to MathML with latex2mathml.

Quick Start:
    >>> from awsm import render
    >>> render("Energy is $E=mc^2$.")
    '<p>Energy is <math xmlns="http://www.w3.org/1998/Math/MathML" ...</p>\\n'

    >>> # Or hold a configuration in a Renderer
    >>> from awsm import Renderer
    >>> renderer = Renderer(highlight=False)
    >>> html = renderer("```rust\\nfn main() {}\\n```")

render() never raises. Malformed formulas become visible error fragments,
unknown code languages fall back to plain text, and dollar amounts that do
not look like math stay literal.
"""

from awsm.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from awsm.errors import AwsmError, MathConversionError, RenderError
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
from awsm.highlighting import get_syntax_database, highlight, supports_language
from awsm.mathml import MathFailure, MathFragment, convert_math, render_math
from awsm.parser import get_parser, iter_events, parse_tokens
from awsm.processor import StreamProcessor, process_events
from awsm.scanner import scan_math
from awsm.serializer import serialize
from awsm.utils.logger import get_logger
from awsm.utils.text import escape_html

__version__ = "0.1.0"

logger = get_logger(__name__)


def _render(markdown: str) -> str:
    env: dict = {}
    tokens = parse_tokens(markdown, env)
    return serialize(process_events(iter_events(tokens)), env)


def render(markdown: str) -> str:
    """Render Markdown to an HTML fragment.

    Uses the render configuration active in the current context.

    Args:
        markdown: Markdown source text

    Returns:
        HTML string, empty when the source has no blocks. Never raises: an
        unexpected failure is logged and the source is returned escaped
        inside a ``render-error`` block.

    Example:
        >>> render("# Hello")
        '<h1>Hello</h1>\\n'
    """
    try:
        return _render(markdown)
    except Exception:
        logger.exception("Rendering failed; returning escaped source")
        return f'<pre class="render-error">{escape_html(str(markdown))}</pre>\n'


class Renderer:
    """Markdown renderer bound to one configuration.

    Usage:
        >>> renderer = Renderer(math=False)
        >>> renderer("Costs $5 or $x$")
        '<p>Costs $5 or $x$</p>\\n'

        >>> # From a settings dict
        >>> renderer = Renderer(config=RenderConfig.from_dict({"highlight_enabled": False}))

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to share one
        Renderer between threads or use several concurrently.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        math: bool = True,
        highlight: bool = True,
        config: RenderConfig | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            math: Render $...$ and $$...$$ as MathML
            highlight: Classify code tokens with the syntax database
            config: Full configuration; overrides math and highlight
        """
        self._config = config or RenderConfig(math_enabled=math, highlight_enabled=highlight)

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, markdown: str) -> str:
        """Render Markdown to HTML with this renderer's configuration."""
        with render_config_context(self._config):
            return render(markdown)

    def render_many(self, sources: list[str]) -> list[str]:
        """Render several documents, setting the config once."""
        with render_config_context(self._config):
            return [render(source) for source in sources]


__all__ = [
    "AwsmError",
    "EndCodeBlock",
    "Event",
    "HardBreak",
    "MathConversionError",
    "MathFailure",
    "MathFragment",
    "Passthrough",
    "RawMarkup",
    "RenderConfig",
    "RenderError",
    "Renderer",
    "SoftBreak",
    "StartCodeBlock",
    "StreamProcessor",
    "Text",
    "convert_math",
    "get_parser",
    "get_render_config",
    "get_syntax_database",
    "highlight",
    "iter_events",
    "parse_tokens",
    "process_events",
    "render",
    "render_config_context",
    "render_math",
    "reset_render_config",
    "scan_math",
    "serialize",
    "set_render_config",
    "supports_language",
]
