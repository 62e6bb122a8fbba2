from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import OrderId, ReviewId, TableNumber

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating: int) -> None:
    if rating < MIN_RATING or rating > MAX_RATING:
        raise DomainValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}")


@dataclass(frozen=True)
class Review:
    review_id: ReviewId
    order_id: OrderId
    table_number: TableNumber
    rating: int
    comment: str
    created_at: datetime

    def __post_init__(self) -> None:
        validate_rating(self.rating)


@dataclass(frozen=True)
class RatingSummary:
    average: float
    total: int
    distribution: dict[int, int]


def summarize_ratings(ratings: list[int]) -> RatingSummary:
    distribution = {rating: 0 for rating in range(MIN_RATING, MAX_RATING + 1)}
    for rating in ratings:
        distribution[rating] = distribution.get(rating, 0) + 1
    if not ratings:
        return RatingSummary(average=0.0, total=0, distribution=distribution)
    average = sum(ratings) / len(ratings)
    return RatingSummary(
        average=int(average * 10 + 0.5) / 10,
        total=len(ratings),
        distribution=distribution,
    )
