"""LaTeX to MathML rendering with total failure containment.

convert_math() returns an explicit result: a MathFragment on success or a
MathFailure carrying the raw LaTeX and a reason. render_math() turns either
into markup and never raises, so one malformed formula cannot abort the
rest of the document.

Usage:
    >>> render_math("E=mc^2", display=False)
    '<math xmlns="http://www.w3.org/1998/Math/MathML" display="inline">...'
    >>> render_math("\\frac{1", display=False)
    '<span class="math-error" style="color:red">Error: \\frac{1</span>'

Thread Safety:
    Stateless. latex2mathml builds a fresh tree per call.
"""

from __future__ import annotations

from dataclasses import dataclass

from latex2mathml.converter import convert as latex_to_mathml

from awsm.config import get_render_config
from awsm.errors import MathConversionError
from awsm.utils.logger import get_logger
from awsm.utils.text import escape_attr, escape_html

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MathFragment:
    """Successfully converted MathML markup."""

    markup: str


@dataclass(frozen=True, slots=True)
class MathFailure:
    """Conversion failure with the offending LaTeX."""

    latex: str
    reason: str


MathResult = MathFragment | MathFailure


def check_braces(latex: str) -> None:
    """Validate that unescaped braces in latex are balanced.

    Raises:
        MathConversionError: if a group is closed before it is opened or
            left open at the end of the source
    """
    depth = 0
    escaped = False
    for char in latex:
        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                raise MathConversionError(latex, "unexpected '}'")
    if depth > 0:
        raise MathConversionError(latex, f"{depth} unclosed '{{'")


def convert_math(latex: str, display: bool) -> MathResult:
    """Convert LaTeX to MathML without raising.

    Args:
        latex: Raw LaTeX between the delimiters
        display: True for block (display) math, False for inline

    Returns:
        MathFragment with the MathML, or MathFailure describing the error
    """
    try:
        check_braces(latex)
        markup = latex_to_mathml(latex, display="block" if display else "inline")
    except MathConversionError as e:
        return MathFailure(latex, e.reason)
    except Exception as e:
        # latex2mathml raises a variety of exception types for malformed input
        logger.debug("latex2mathml failed on %r", latex, exc_info=True)
        return MathFailure(latex, f"{type(e).__name__}: {e}")
    return MathFragment(markup)


def render_error(failure: MathFailure) -> str:
    """Render a visible inline error fragment for a failed formula."""
    css_class = escape_attr(get_render_config().math_error_class)
    return f'<span class="{css_class}" style="color:red">Error: {escape_html(failure.latex)}</span>'


def render_math(latex: str, display: bool) -> str:
    """Render LaTeX to MathML, or to an error fragment if conversion fails.

    Args:
        latex: Raw LaTeX between the delimiters
        display: True for block (display) math, False for inline

    Returns:
        Markup fragment; never raises
    """
    result = convert_math(latex, display)
    match result:
        case MathFragment(markup=markup):
            return markup
        case MathFailure():
            logger.debug("Math conversion failed: %s", result.reason)
            return render_error(result)
