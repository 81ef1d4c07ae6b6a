"""Exception classes for awsm.

None of these escape the public ``render`` entry point. They mark failures
inside the pipeline before they are contained and turned into markup.
"""

from __future__ import annotations


class AwsmError(Exception):
    """Base exception for all awsm errors."""

    pass


class MathConversionError(AwsmError):
    """LaTeX could not be converted to MathML.

    Carries the raw LaTeX so the caller can show it in an error fragment.
    """

    def __init__(self, latex: str, reason: str) -> None:
        """Initialize conversion error.

        Args:
            latex: The raw LaTeX source that failed
            reason: Short description of the failure
        """
        self.latex = latex
        self.reason = reason
        super().__init__(f"Cannot convert {latex!r}: {reason}")


class RenderError(AwsmError):
    """Unexpected failure inside the rendering pipeline.

    Raised internally when a stage produces something the next stage
    cannot consume (e.g. an unknown event reaching the serializer).
    """

    pass
