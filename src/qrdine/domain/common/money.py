from __future__ import annotations

from dataclasses import dataclass

from qrdine.domain.common.errors import DomainValidationError

DEFAULT_CURRENCY = "IDR"


@dataclass(frozen=True)
class Money:
    amount: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise DomainValidationError("amount must be >= 0")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise DomainValidationError("currency must be a 3-letter uppercase code")

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise DomainValidationError("cannot add money with different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def times(self, quantity: int) -> Money:
        return Money(amount=self.amount * quantity, currency=self.currency)
