"""Exception types raised by ffbracket.

Both concrete errors subclass ``ValueError`` so callers that already guard
``(OSError, ValueError)`` keep working unchanged.
"""

from __future__ import annotations


class FFBracketError(Exception):
    """Base class for all ffbracket errors."""


class ConfigError(FFBracketError, ValueError):
    """League settings that cannot be turned into a playoff format."""


class DataError(FFBracketError, ValueError):
    """An input document whose shape cannot be interpreted at all."""
