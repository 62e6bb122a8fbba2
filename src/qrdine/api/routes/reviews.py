from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from qrdine.api.security import Principal, require_admin
from qrdine.application.dto.requests import CreateReviewRequest, UpdateReviewRequest
from qrdine.application.dto.responses import (
    MessageResponse,
    ReviewResponse,
    ReviewsResponse,
    ReviewStatsResponse,
)
from qrdine.application.use_cases.reviews import (
    CreateReview,
    DeleteReview,
    GetReview,
    GetReviewStats,
    ListReviews,
    UpdateReview,
)
from qrdine.domain.common.ids import OrderId, ReviewId, TableNumber
from qrdine.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from qrdine.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository

router = APIRouter(tags=["reviews"])


def _create_review_use_case() -> CreateReview:
    return CreateReview(
        review_repository=SqlAlchemyReviewRepository(),
        order_repository=SqlAlchemyOrderRepository(),
    )


def _list_reviews_use_case() -> ListReviews:
    return ListReviews(review_repository=SqlAlchemyReviewRepository())


def _get_review_use_case() -> GetReview:
    return GetReview(review_repository=SqlAlchemyReviewRepository())


def _update_review_use_case() -> UpdateReview:
    return UpdateReview(review_repository=SqlAlchemyReviewRepository())


def _delete_review_use_case() -> DeleteReview:
    return DeleteReview(review_repository=SqlAlchemyReviewRepository())


def _review_stats_use_case() -> GetReviewStats:
    return GetReviewStats(review_repository=SqlAlchemyReviewRepository())


@router.post(
    "/v1/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_review(request_dto: CreateReviewRequest) -> ReviewResponse:
    return _create_review_use_case().execute(request_dto)


@router.get("/v1/reviews", response_model=ReviewsResponse)
def list_reviews(
    table_number: str | None = Query(default=None, alias="tableNumber"),
    order_id: str | None = Query(default=None, alias="orderId"),
) -> ReviewsResponse:
    return _list_reviews_use_case().execute(
        table_number=TableNumber(table_number) if table_number else None,
        order_id=OrderId(order_id) if order_id else None,
    )


# Declared before /v1/reviews/{review_id} so "stats" is not taken for an id.
@router.get("/v1/reviews/stats", response_model=ReviewStatsResponse)
def review_stats() -> ReviewStatsResponse:
    return _review_stats_use_case().execute()


@router.get("/v1/reviews/{review_id}", response_model=ReviewResponse)
def get_review(review_id: str) -> ReviewResponse:
    return _get_review_use_case().execute(review_id=ReviewId(review_id))


@router.put("/v1/reviews/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str,
    request_dto: UpdateReviewRequest,
    _: Principal = Depends(require_admin),
) -> ReviewResponse:
    return _update_review_use_case().execute(
        review_id=ReviewId(review_id),
        request_dto=request_dto,
    )


@router.delete("/v1/reviews/{review_id}", response_model=MessageResponse)
def delete_review(review_id: str, _: Principal = Depends(require_admin)) -> MessageResponse:
    return _delete_review_use_case().execute(review_id=ReviewId(review_id))
