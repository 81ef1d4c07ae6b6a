"""Tests for the syntax database and code block highlighting."""

import pytest

from awsm.config import RenderConfig, render_config_context
from awsm.highlighting import (
    SyntaxDatabase,
    get_syntax_database,
    highlight,
    resolve_lexer,
    supports_language,
)

LEXER_TABLE = [
    ("Rust", ("rust", "rs"), ("*.rs", "*.rs.in"), ("text/rust",)),
    ("Kotlin", ("kotlin",), ("*.kt", "*.kts"), ()),
    ("Ruby", ("ruby", "rb"), ("*.rb", "Rakefile"), ()),
    ("Other Ruby", ("kt",), (), ()),
]


class TestSyntaxDatabase:
    """Token lookup rules."""

    def test_alias(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.find("rust") == "Rust"
        assert db.find("rs") == "Rust"

    def test_extension(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.find("kts") == "Kotlin"

    def test_alias_beats_extension(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.find("kt") == "Other Ruby"

    def test_non_extension_patterns_ignored(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert "Rakefile" not in db
        assert "rs.in" not in db

    def test_case_sensitive(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.find("Rust") is None
        assert db.find("RS") is None

    def test_missing(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.find(None) is None
        assert db.find("") is None
        assert db.find("cobol") is None

    def test_read_only(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        with pytest.raises(TypeError):
            db._tokens["x"] = "y"  # type: ignore[index]

    def test_tokens_sorted(self) -> None:
        db = SyntaxDatabase.from_lexer_table(LEXER_TABLE)
        assert db.tokens() == sorted(db.tokens())
        assert len(db) == len(db.tokens())


class TestSharedDatabase:
    def test_common_languages(self) -> None:
        for token in ("rust", "python", "js", "ts", "bash", "json"):
            assert supports_language(token), token

    def test_unknown(self) -> None:
        assert not supports_language("unknown-lang-123")
        assert not supports_language(None)

    def test_same_instance(self) -> None:
        assert get_syntax_database() is get_syntax_database()

    def test_resolve_falls_back_to_text(self) -> None:
        assert resolve_lexer("unknown-lang-123").name == "Text only"
        assert resolve_lexer(None).name == "Text only"
        assert resolve_lexer("python").name == "Python"


class TestHighlight:
    """HTML output of highlight()."""

    def test_rust_tokens(self) -> None:
        html = highlight("fn main() {}\n", "rust")
        assert html.startswith('<pre><code class="language-rust">')
        assert html.endswith("</code></pre>")
        assert '<span class="k">fn</span>' in html
        assert '<span class="nf">main</span>' in html

    def test_one_span_per_line(self) -> None:
        html = highlight("a\nb\n\nc", None)
        assert html.count('<span class="line">') == 4
        assert '<span class="line"></span>\n' in html

    def test_plain_text_has_no_token_spans(self) -> None:
        html = highlight("some code\n", "unknown-lang-123")
        assert html == (
            '<pre><code class="language-unknown-lang-123">'
            '<span class="line">some code</span>\n'
            "</code></pre>"
        )

    def test_fallback_language_class(self) -> None:
        assert 'class="language-text"' in highlight("x", None)

    def test_escapes_markup(self) -> None:
        html = highlight('<a href="x">&</a>\n', "html")
        assert "<a href" not in html
        assert "&lt;" in html
        assert "&amp;" in html

    def test_escapes_language_attribute(self) -> None:
        html = highlight("x", 'a"b')
        assert 'class="language-a&quot;b"' in html

    def test_preserves_whitespace(self) -> None:
        html = highlight("    indented\n\ttab\n", "text")
        assert "    indented" in html
        assert "\ttab" in html

    def test_highlight_disabled(self) -> None:
        with render_config_context(RenderConfig(highlight_enabled=False)):
            html = highlight("fn main() {}\n", "rust")
        assert 'class="language-rust"' in html
        assert '<span class="k">' not in html

    def test_custom_fallback_language(self) -> None:
        with render_config_context(RenderConfig(fallback_language="plain")):
            html = highlight("x", None)
        assert 'class="language-plain"' in html

    def test_lexer_failure_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class BrokenLexer:
            def get_tokens(self, code: str):
                raise RuntimeError("lexer bug")

        monkeypatch.setattr("awsm.highlighting.resolve_lexer", lambda language: BrokenLexer())
        html = highlight("x < y\n", "python")
        assert "x &lt; y" in html
        assert 'class="language-python"' in html
