"""Tests for the high-level awsm API."""

from awsm import Renderer, render


class TestRenderFunction:
    """Tests for the render() function."""

    def test_basic_markdown(self) -> None:
        """Headings and paragraphs render as plain CommonMark."""
        html = render("# Hello\n\nThis is a paragraph.")
        assert "<h1>Hello</h1>" in html
        assert "<p>This is a paragraph.</p>" in html

    def test_tables(self) -> None:
        html = render("| Header |\n| ------ |\n| Cell   |\n")
        assert "<table>" in html
        assert "<th>Header</th>" in html

    def test_task_lists(self) -> None:
        html = render("- [x] Done\n- [ ] Todo\n")
        assert 'type="checkbox"' in html
        assert "checked" in html

    def test_strikethrough(self) -> None:
        html = render("~~strike~~")
        assert "<s>strike</s>" in html

    def test_footnotes(self) -> None:
        html = render("Text[^1]\n\n[^1]: The note.\n")
        assert "footnote-ref" in html
        assert "The note." in html

    def test_empty_source_renders_empty(self) -> None:
        """An empty document has no blocks, so the fragment is empty."""
        assert render("") == ""
        assert render("\n\n") == ""

    def test_raw_html_passes_through(self) -> None:
        html = render("<div class=\"box\">hi</div>\n\nand <b>bold</b>")
        assert '<div class="box">hi</div>' in html
        assert "<b>bold</b>" in html


class TestCodeBlocks:
    """Code blocks are highlighted and never scanned for math."""

    def test_known_language(self) -> None:
        html = render("```rust\nfn main() {}\n```\n")
        assert 'class="language-rust"' in html
        assert '<span class="k">fn</span>' in html

    def test_unknown_language_keeps_token(self) -> None:
        html = render("```unknown-lang-123\nsome code\n```\n")
        assert 'class="language-unknown-lang-123"' in html
        assert "some code" in html

    def test_no_language_uses_text(self) -> None:
        html = render("```\nplain\n```\n")
        assert 'class="language-text"' in html
        assert "plain" in html

    def test_indented_code_block(self) -> None:
        html = render("Para\n\n    indented $x$\n")
        assert 'class="language-text"' in html
        assert "indented $x$" in html
        assert "<math" not in html

    def test_dollar_in_code_is_not_math(self) -> None:
        source = (
            "Here is some implementation:\n\n"
            "```rust\nlet cost = \"$100\"; // $x$\n```\n\n"
            "And here is the formula: $x + y = z$.\n"
        )
        html = render(source)
        assert "let" in html
        assert "$100" in html
        assert html.count("<math") == 1

    def test_markup_in_code_is_escaped(self) -> None:
        html = render("```html\n<script>alert('x')</script>\n```\n")
        assert "<script>" not in html
        assert "&lt;" in html

    def test_math_fence_renders_display_math(self) -> None:
        html = render("```math\nE=mc^2\n```\n")
        assert "<math" in html
        assert 'display="block"' in html
        assert "language-math" not in html

    def test_code_block_inside_list(self) -> None:
        html = render("- item\n\n  ```python\n  def f(): pass\n  ```\n")
        assert "<li>" in html
        assert 'class="language-python"' in html


class TestMath:
    """Inline and display math rendering."""

    def test_inline_math(self) -> None:
        html = render("Energy is $E=mc^2$.")
        assert "$E=mc^2$" not in html
        assert "<math" in html

    def test_display_math_across_lines(self) -> None:
        html = render("$$\n\\int_0^\\infty x^2 dx\n$$\n")
        assert "<math" in html
        assert 'display="block"' in html
        assert html.count("<math") == 1

    def test_display_math_single_line(self) -> None:
        html = render("Before $$a+b$$ after")
        assert 'display="block"' in html
        assert "Before " in html
        assert " after" in html

    def test_currency_is_not_math(self) -> None:
        html = render("The costs are $5 and $10 respectively.")
        assert "<math" not in html
        assert "$5" in html
        assert "$10" in html

    def test_three_inline_formulas(self) -> None:
        html = render("If $a=1$ and $b=2$, then $c=3$.")
        assert html.count("<math") == 3
        assert html.startswith("<p>If <math")
        assert "</math> and <math" in html
        assert "</math>, then <math" in html
        assert html.endswith("</math>.</p>\n")

    def test_invalid_math_shows_error(self) -> None:
        html = render("$\\frac{1$")
        assert "math-error" in html
        assert "<math" not in html

    def test_unclosed_display_math_stays_text(self) -> None:
        html = render("$$\nx + y\n\nNext paragraph")
        assert "<math" not in html
        assert "$$" in html
        assert "<p>Next paragraph</p>" in html

    def test_unclosed_display_math_in_emphasis(self) -> None:
        html = render("*a $$b* c")
        assert html == "<p><em>a $$b</em> c</p>\n"

    def test_unclosed_display_math_in_link(self) -> None:
        html = render("[a $$b](http://x) c")
        assert html == '<p><a href="http://x">a $$b</a> c</p>\n'

    def test_unclosed_display_math_keeps_inline_code(self) -> None:
        html = render("$$ price `x` more")
        assert html == "<p>$$ price <code>x</code> more</p>\n"

    def test_display_math_closing_outside_emphasis(self) -> None:
        html = render("*a $$b* c$$")
        assert html.count("<em>") == html.count("</em>") == 1
        assert 'display="block"' in html

    def test_math_in_table_cell(self) -> None:
        html = render("| f |\n| - |\n| $x^2$ |\n")
        assert "<td><math" in html


class TestRendererClass:
    """Tests for the Renderer class."""

    def test_basic_usage(self) -> None:
        renderer = Renderer()
        html = renderer("# Hello **World**")
        assert "<h1>Hello <strong>World</strong></h1>" in html

    def test_math_disabled(self) -> None:
        renderer = Renderer(math=False)
        html = renderer("Costs $5 or $x$")
        assert "<math" not in html
        assert "$x$" in html

    def test_highlight_disabled(self) -> None:
        renderer = Renderer(highlight=False)
        html = renderer("```rust\nfn main() {}\n```\n")
        assert 'class="language-rust"' in html
        assert '<span class="k">' not in html
        assert "fn main() {}" in html

    def test_config_does_not_leak(self) -> None:
        Renderer(math=False)("$x$")
        assert "<math" in render("$x$")

    def test_render_many(self) -> None:
        renderer = Renderer()
        results = renderer.render_many(["$a$", "plain", "# H"])
        assert len(results) == 3
        assert "<math" in results[0]
        assert results[1] == "<p>plain</p>\n"
        assert results[2] == "<h1>H</h1>\n"
