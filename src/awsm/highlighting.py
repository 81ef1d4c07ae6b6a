"""Syntax highlighting for captured code blocks.

Code is classified with Pygments. The syntax database maps language tokens
(lexer aliases, then bare filename extensions) to Pygments lexer names. It
is built from the lexer table Pygments ships precompiled, once, on first
use, and is read-only afterwards.

Output shape:
    <pre><code class="language-rust">
    <span class="line"><span class="k">fn</span> <span class="nf">main</span>...</span>
    ...
    </code></pre>

The language class always reflects the literal token, even when no lexer
matched it, so callers can style unknown languages distinctly.

Usage:
    >>> from awsm.highlighting import highlight
    >>> highlight("fn main() {}\\n", "rust")
    '<pre><code class="language-rust"><span class="line"><span class="k">fn</span>...'

Thread Safety:
    get_syntax_database() builds under a lock; at most one build runs and
    every caller observes the same instance. The database exposes no
    mutators. Lexers are instantiated per call.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from pygments.lexer import Lexer
from pygments.lexers import find_lexer_class, get_all_lexers
from pygments.lexers.special import TextLexer
from pygments.token import STANDARD_TYPES, Token, _TokenType

from awsm.config import get_render_config
from awsm.utils.logger import get_logger
from awsm.utils.text import escape_attr, escape_html

logger = get_logger(__name__)

_EXTENSION_PATTERN = re.compile(r"^\*\.([\w+-]+)$")


class SyntaxDatabase:
    """Read-only mapping from language token to Pygments lexer name.

    Lookups are case-sensitive exact matches. Aliases take priority over
    filename extensions when both claim the same token.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Mapping[str, str]) -> None:
        self._tokens: Mapping[str, str] = MappingProxyType(dict(tokens))

    @classmethod
    def from_lexer_table(
        cls, table: Iterable[tuple[str, tuple[str, ...], tuple[str, ...], tuple[str, ...]]]
    ) -> SyntaxDatabase:
        """Build a database from (name, aliases, filenames, mimetypes) rows."""
        rows = list(table)
        tokens: dict[str, str] = {}
        for name, aliases, _filenames, _mimetypes in rows:
            for alias in aliases:
                tokens.setdefault(alias, name)
        for name, _aliases, filenames, _mimetypes in rows:
            for pattern in filenames:
                match = _EXTENSION_PATTERN.match(pattern)
                if match:
                    tokens.setdefault(match.group(1), name)
        return cls(tokens)

    def find(self, token: str | None) -> str | None:
        """Return the lexer name for token, or None if unknown."""
        if not token:
            return None
        return self._tokens.get(token)

    def tokens(self) -> list[str]:
        """All known language tokens, sorted."""
        return sorted(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)


_database: SyntaxDatabase | None = None
_database_lock = threading.Lock()


def _build_database() -> SyntaxDatabase:
    database = SyntaxDatabase.from_lexer_table(get_all_lexers())
    logger.debug("Syntax database loaded with %d language tokens", len(database))
    return database


def get_syntax_database() -> SyntaxDatabase:
    """Get the process-wide syntax database, building it on first access."""
    global _database
    database = _database
    if database is not None:
        return database
    with _database_lock:
        if _database is None:
            _database = _build_database()
        return _database


def supports_language(language: str | None) -> bool:
    """Check if a language token resolves to a real lexer."""
    return get_syntax_database().find(language) is not None


def resolve_lexer(language: str | None) -> Lexer:
    """Return a lexer for the token, falling back to plain text.

    Absent or unknown tokens are a normal condition, not an error.
    """
    name = get_syntax_database().find(language)
    lexer_class = find_lexer_class(name) if name else None
    if lexer_class is None:
        if language:
            logger.debug("No syntax definition for %r, using plain text", language)
        lexer_class = TextLexer
    return lexer_class(stripnl=False, ensurenl=False)


def _css_class(ttype: _TokenType) -> str:
    # Walk up to the nearest standard token type (e.g. Name.Function.Magic -> fm)
    while ttype not in STANDARD_TYPES:
        ttype = ttype.parent
    return STANDARD_TYPES[ttype]


def _format_lines(tokens: Iterable[tuple[_TokenType, str]]) -> Iterator[str]:
    """Wrap each source line of classified tokens in a line span."""
    line: list[str] = []
    for ttype, value in tokens:
        css = _css_class(ttype)
        parts = value.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                yield f'<span class="line">{"".join(line)}</span>\n'
                line = []
            if not part:
                continue
            if css:
                line.append(f'<span class="{css}">{escape_html(part)}</span>')
            else:
                line.append(escape_html(part))
    if line:
        yield f'<span class="line">{"".join(line)}</span>'


def highlight(code: str, language: str | None) -> str:
    """Highlight a code block.

    Args:
        code: Captured code text (line endings preserved)
        language: Language token from the fence, or None

    Returns:
        HTML fragment; code content is always escaped, never interpreted
    """
    config = get_render_config()
    lang_class = language or config.fallback_language
    if config.highlight_enabled:
        lexer = resolve_lexer(language)
    else:
        lexer = TextLexer(stripnl=False, ensurenl=False)

    try:
        body = "".join(_format_lines(lexer.get_tokens(code)))
    except Exception:
        logger.debug("Syntax highlighting failed for language %r", language, exc_info=True)
        body = "".join(_format_lines([(Token.Text, code)]))

    return f'<pre><code class="language-{escape_attr(lang_class)}">{body}</code></pre>'

