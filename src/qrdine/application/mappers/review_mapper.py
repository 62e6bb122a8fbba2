from __future__ import annotations

from qrdine.application.dto.responses import ReviewResponse, ReviewStatsResponse
from qrdine.domain.review.entities import RatingSummary, Review


def to_review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        reviewId=str(review.review_id),
        orderId=str(review.order_id),
        tableNumber=str(review.table_number),
        rating=review.rating,
        comment=review.comment,
        createdAt=review.created_at,
    )


def to_review_stats_response(summary: RatingSummary) -> ReviewStatsResponse:
    return ReviewStatsResponse(
        averageRating=summary.average,
        totalReviews=summary.total,
        distribution={str(rating): count for rating, count in summary.distribution.items()},
    )
