from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from qrdine.application.dto.requests import CreateReviewRequest, UpdateReviewRequest
from qrdine.application.dto.responses import (
    MessageResponse,
    ReviewResponse,
    ReviewsResponse,
    ReviewStatsResponse,
)
from qrdine.application.mappers.review_mapper import to_review_response, to_review_stats_response
from qrdine.application.ports.repositories import OrderRepository, ReviewRepository
from qrdine.application.use_cases.order_transitions import load_order
from qrdine.domain.common.ids import OrderId, ReviewId, TableNumber
from qrdine.domain.review.entities import Review, summarize_ratings


class ReviewNotFoundError(Exception):
    pass


def _load_review(repository: ReviewRepository, review_id: ReviewId) -> Review:
    review = repository.get(review_id)
    if review is None:
        raise ReviewNotFoundError(f"review {review_id} not found")
    return review


class CreateReview:
    def __init__(
        self,
        review_repository: ReviewRepository,
        order_repository: OrderRepository,
    ) -> None:
        self._review_repository = review_repository
        self._order_repository = order_repository

    def execute(self, request_dto: CreateReviewRequest) -> ReviewResponse:
        order = load_order(self._order_repository, OrderId(request_dto.order_id))
        review = Review(
            review_id=ReviewId(f"rev_{uuid4().hex[:12]}"),
            order_id=order.order_id,
            table_number=TableNumber(request_dto.table_number),
            rating=request_dto.rating,
            comment=request_dto.comment or "",
            created_at=datetime.now(timezone.utc),
        )
        self._review_repository.add(review)
        return to_review_response(review)


class ListReviews:
    def __init__(self, review_repository: ReviewRepository) -> None:
        self._review_repository = review_repository

    def execute(
        self,
        table_number: TableNumber | None = None,
        order_id: OrderId | None = None,
    ) -> ReviewsResponse:
        reviews = sorted(
            self._review_repository.list_all(table_number=table_number, order_id=order_id),
            key=lambda review: review.created_at,
            reverse=True,
        )
        return ReviewsResponse(reviews=[to_review_response(review) for review in reviews])


class GetReview:
    def __init__(self, review_repository: ReviewRepository) -> None:
        self._review_repository = review_repository

    def execute(self, review_id: ReviewId) -> ReviewResponse:
        return to_review_response(_load_review(self._review_repository, review_id))


class UpdateReview:
    def __init__(self, review_repository: ReviewRepository) -> None:
        self._review_repository = review_repository

    def execute(self, review_id: ReviewId, request_dto: UpdateReviewRequest) -> ReviewResponse:
        review = _load_review(self._review_repository, review_id)
        updated = replace(
            review,
            rating=request_dto.rating if request_dto.rating is not None else review.rating,
            comment=request_dto.comment if request_dto.comment is not None else review.comment,
        )
        self._review_repository.update(updated)
        return to_review_response(updated)


class DeleteReview:
    def __init__(self, review_repository: ReviewRepository) -> None:
        self._review_repository = review_repository

    def execute(self, review_id: ReviewId) -> MessageResponse:
        if not self._review_repository.delete(review_id):
            raise ReviewNotFoundError(f"review {review_id} not found")
        return MessageResponse(message=f"review {review_id} deleted")


class GetReviewStats:
    def __init__(self, review_repository: ReviewRepository) -> None:
        self._review_repository = review_repository

    def execute(self) -> ReviewStatsResponse:
        return to_review_stats_response(summarize_ratings(self._review_repository.ratings()))
