"""ContextVar-based render configuration for awsm.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Renderer instance and read by the event processor,
the highlighter and the math renderer during a render() call.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # In Renderer class
    renderer = Renderer(highlight=False)
    html = renderer("# Hello")  # Sets config internally via ContextVar

    # Direct processor usage (advanced)
    from awsm.config import RenderConfig, render_config_context

    with render_config_context(RenderConfig(math_enabled=False)):
        events = list(process_events(iter_events(source)))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        math_enabled: Scan text for $inline$ and $$block$$ math
        highlight_enabled: Classify code block tokens with the syntax database
        math_fence_languages: Fence tokens whose content renders as display math
        fallback_language: Language class used when a code block has no token
        math_error_class: CSS class of the fragment shown for malformed math

    """

    math_enabled: bool = True
    highlight_enabled: bool = True
    math_fence_languages: frozenset[str] = frozenset({"math", "latex"})
    fallback_language: str = "text"
    math_error_class: str = "math-error"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RenderConfig":
        """Create RenderConfig from dictionary.

        Only includes keys that are valid RenderConfig fields; unknown keys
        are silently ignored. Sequences given for math_fence_languages are
        frozen.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "highlight_enabled": False,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.highlight_enabled
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "math_fence_languages" in filtered:
            filtered["math_fence_languages"] = frozenset(filtered["math_fence_languages"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get current render configuration (thread-local)."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set render configuration for current context.

    Args:
        config: RenderConfig instance to use for this context.

    """
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(math_enabled=False)):
        ...     html = render("$x$")
        >>> # Automatically reset to previous config

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
