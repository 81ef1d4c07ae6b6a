"""Command line interface for awsm.

    awsm render notes.md -o notes.html
    awsm render notes.md --no-math
    awsm languages
"""

from pathlib import Path
from typing import Optional

import typer

from awsm import Renderer
from awsm.config import RenderConfig
from awsm.highlighting import get_syntax_database

app = typer.Typer(help="Render Markdown with highlighted code and MathML math")


@app.command()
def render(
    input_file: Path = typer.Argument(..., help="Path to input Markdown file"),
    output_file: Optional[Path] = typer.Option(None, "--output", "-o", help="Write HTML here instead of stdout"),
    math: bool = typer.Option(True, "--math/--no-math", help="Render $...$ and $$...$$ as MathML"),
    highlight: bool = typer.Option(True, "--highlight/--no-highlight", help="Highlight code blocks"),
):
    """
    Render a Markdown file to an HTML fragment.
    """
    if not input_file.exists():
        typer.echo(f"Error: File {input_file} not found.", err=True)
        raise typer.Exit(code=1)

    md_content = input_file.read_text(encoding="utf-8")
    renderer = Renderer(config=RenderConfig(math_enabled=math, highlight_enabled=highlight))
    html = renderer(md_content)

    if output_file is None:
        typer.echo(html, nl=False)
    else:
        output_file.write_text(html, encoding="utf-8")
        typer.echo(f"Wrote {output_file}", err=True)


@app.command()
def languages():
    """
    List the language tokens code blocks can be highlighted with.
    """
    for token in get_syntax_database().tokens():
        typer.echo(token)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
