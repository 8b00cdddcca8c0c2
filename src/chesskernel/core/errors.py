"""Caller-facing errors of the rules kernel."""

from __future__ import annotations


class IllegalMoveError(ValueError):
    """Raised when a driver applies a move absent from the safe-move map."""
