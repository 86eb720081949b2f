"""Exception types raised by the blockstring helpers."""

from __future__ import annotations


class BlockStringError(Exception):
    """Base class for every error raised by this package."""


class TemplateShapeError(BlockStringError, ValueError):
    """Raised when literal segments and substitution values do not line up."""


class ProcessorConfigError(BlockStringError, TypeError):
    """Raised when a processor factory receives invalid options."""
