# umd/exceptions.py
"""
Exceptions raised by the rendering pipeline.

Malformed markup never raises: unterminated calls, dangling table markers
and over-deep nesting all fall back to literal text. The exceptions below
cover the remaining cases, which are either internal defects or problems
with the environment the engine runs in.
"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class UMDError(Exception):
    """Base class for all errors raised by the umd package."""


class PlaceholderError(UMDError):
    """
    A placeholder token survived restoration or was never consumed.

    This always indicates an internal consistency bug rather than bad input,
    so it is raised loudly instead of silently dropping content.

    Attributes:
        message: Human-readable error description
        tokens: The offending tokens, in registration order
    """

    def __init__(self, message: str, tokens: Optional[Iterable[str]] = None) -> None:
        self.message = message
        self.tokens = list(tokens or [])
        super().__init__(self.message)

        logger.error(
            f"Placeholder protocol violation: {message} (tokens: {', '.join(self.tokens) or 'none'})"
        )


class EngineError(UMDError):
    """
    The external markdown engine failed or is not available.

    Attributes:
        message: Human-readable error description
        engine: Name of the engine adapter that failed
    """

    def __init__(self, message: str, engine: Optional[str] = None) -> None:
        self.message = message
        self.engine = engine
        super().__init__(self.message)

        logger.error(f"Markdown engine '{engine or 'unknown'}' failed: {message}")


class ConfigurationError(UMDError):
    """An unknown or invalid render option was supplied."""

    def __init__(self, message: str, option: Optional[str] = None) -> None:
        self.message = message
        self.option = option
        super().__init__(self.message)
