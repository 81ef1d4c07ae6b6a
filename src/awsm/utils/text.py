"""Text escaping helpers shared by the highlighter and math renderer."""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape text for an HTML text node.

    Escapes <, >, & and double quotes but not single quotes, matching
    what markdown-it emits for ordinary text.

    Example:
        >>> escape_html('<a href="x">')
        '&lt;a href=&quot;x&quot;&gt;'
    """
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def escape_attr(text: str) -> str:
    """Escape text for use inside a double-quoted attribute value."""
    return html_module.escape(text, quote=True)
