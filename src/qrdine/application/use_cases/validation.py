from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from qrdine.domain.common.errors import DomainValidationError


class InvalidInputError(Exception):
    pass


@contextmanager
def rejecting_invalid_input() -> Iterator[None]:
    """Report entity rule violations on caller input as request errors.

    Only wraps entities built from request data. A stored row that breaks
    an entity rule stays a server error.
    """
    try:
        yield
    except DomainValidationError as exc:
        raise InvalidInputError(str(exc)) from exc
