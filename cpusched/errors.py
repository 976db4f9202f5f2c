from __future__ import annotations


class ValidationError(ValueError):
    """
    Raised when scheduler input is malformed or incomplete.

    Raised before any simulation work starts, so a failing call never
    produces a partial result.
    """
