from __future__ import annotations


class DomainValidationError(ValueError):
    """An entity was built from values that break one of its rules."""
