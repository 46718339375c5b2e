"""Exceptions raised across the resolution core."""

from __future__ import annotations


class InvalidRequestError(ValueError):
    """Raised for programmer errors such as a request without an extension key."""


class StrategyConflictError(ValueError):
    """Raised when two strategies are registered under the same name."""


__all__ = ["InvalidRequestError", "StrategyConflictError"]
