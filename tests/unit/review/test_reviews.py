from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.application.dto.requests import CreateReviewRequest, UpdateReviewRequest
from qrdine.application.use_cases.order_transitions import OrderNotFoundError
from qrdine.application.use_cases.reviews import (
    CreateReview,
    DeleteReview,
    GetReviewStats,
    ListReviews,
    ReviewNotFoundError,
    UpdateReview,
)
from qrdine.domain.common.ids import MenuItemId, OrderId, ReviewId, TableNumber
from qrdine.domain.order.entities import Order, build_order_line, create_pending_order
from qrdine.domain.review.entities import Review, summarize_ratings

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


class FakeReviewRepository:
    def __init__(self) -> None:
        self.reviews: dict[str, Review] = {}

    def get(self, review_id: ReviewId) -> Review | None:
        return self.reviews.get(str(review_id))

    def list_all(
        self,
        table_number: TableNumber | None = None,
        order_id: OrderId | None = None,
    ) -> list[Review]:
        return [
            review
            for review in self.reviews.values()
            if (table_number is None or review.table_number == table_number)
            and (order_id is None or review.order_id == order_id)
        ]

    def add(self, review: Review) -> None:
        self.reviews[str(review.review_id)] = review

    def update(self, review: Review) -> None:
        self.reviews[str(review.review_id)] = review

    def delete(self, review_id: ReviewId) -> bool:
        return self.reviews.pop(str(review_id), None) is not None

    def ratings(self) -> list[int]:
        return [review.rating for review in self.reviews.values()]


class FakeOrderRepository:
    def __init__(self, *orders: Order) -> None:
        self.orders = {str(order.order_id): order for order in orders}

    def get(self, order_id: OrderId) -> Order | None:
        return self.orders.get(str(order_id))


def _order(order_id: str = "o1") -> Order:
    return create_pending_order(
        order_id=OrderId(order_id),
        table_number=TableNumber("1"),
        lines=[build_order_line(MenuItemId("m1"), "Nasi", unit_price=1000, quantity=1)],
        now=NOW,
    )


def _review(review_id: str, rating: int, table_number: str = "1", minutes: int = 0) -> Review:
    return Review(
        review_id=ReviewId(review_id),
        order_id=OrderId("o1"),
        table_number=TableNumber(table_number),
        rating=rating,
        comment="",
        created_at=NOW + timedelta(minutes=minutes),
    )


def test_create_review_requires_existing_order() -> None:
    reviews = FakeReviewRepository()
    use_case = CreateReview(reviews, FakeOrderRepository(_order()))

    created = use_case.execute(
        CreateReviewRequest(orderId="o1", tableNumber="1", rating=4, comment="Mantap")
    )
    assert created.rating == 4
    assert created.comment == "Mantap"

    with pytest.raises(OrderNotFoundError):
        use_case.execute(CreateReviewRequest(orderId="missing", tableNumber="1", rating=4))


def test_rating_outside_range_is_rejected() -> None:
    with pytest.raises(ValidationError):
        CreateReviewRequest(orderId="o1", tableNumber="1", rating=6)
    with pytest.raises(ValueError):
        _review("r1", 0)


def test_list_filters_by_table_newest_first() -> None:
    reviews = FakeReviewRepository()
    reviews.add(_review("r1", 5, "1", minutes=0))
    reviews.add(_review("r2", 3, "1", minutes=10))
    reviews.add(_review("r3", 4, "2"))

    result = ListReviews(reviews).execute(table_number=TableNumber("1"))

    assert [review.reviewId for review in result.reviews] == ["r2", "r1"]


def test_update_and_delete() -> None:
    reviews = FakeReviewRepository()
    reviews.add(_review("r1", 2))

    updated = UpdateReview(reviews).execute(ReviewId("r1"), UpdateReviewRequest(comment="Better"))
    assert updated.rating == 2
    assert updated.comment == "Better"

    DeleteReview(reviews).execute(ReviewId("r1"))
    with pytest.raises(ReviewNotFoundError):
        DeleteReview(reviews).execute(ReviewId("r1"))


def test_stats_average_and_distribution() -> None:
    reviews = FakeReviewRepository()
    for index, rating in enumerate([5, 4, 4, 2]):
        reviews.add(_review(f"r{index}", rating))

    stats = GetReviewStats(reviews).execute()

    assert stats.averageRating == 3.8
    assert stats.totalReviews == 4
    assert stats.distribution == {"1": 0, "2": 1, "3": 0, "4": 2, "5": 1}


def test_stats_without_reviews() -> None:
    summary = summarize_ratings([])

    assert summary.average == 0.0
    assert summary.total == 0
    assert set(summary.distribution) == {1, 2, 3, 4, 5}
