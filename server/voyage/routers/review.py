"""Tour review router: public listing and submission, back-office moderation."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.dependencies import AdminAuth
from ..core.exceptions import ProblemDetailsException, unexpected_error
from ..schemas.common import DeleteRequest, DeleteResponse
from ..schemas.review import (
    ApproveReviewRequest,
    Review,
    ReviewList,
    SearchReviewsRequest,
    SubmitReviewRequest,
    TourReviews,
    TourReviewsRequest,
)
from ..services.review_service import ReviewService
from .catalog import json_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/review", tags=["review"])

DB_DEPENDENCY = Depends(get_db)


def _convert_review_to_schema(review_model) -> Review:
    """Convert review model to schema."""
    return Review(
        id=str(review_model.id),
        tour_id=str(review_model.tour_id),
        name=review_model.name,
        rating=review_model.rating,
        comment=review_model.comment,
        is_approved=review_model.is_approved,
        created_at=review_model.created_at,
    )


@router.post("/list", response_model=TourReviews)
async def list_tour_reviews(
    request: TourReviewsRequest,
    db: AsyncSession = DB_DEPENDENCY,
) -> JSONResponse:
    """Approved reviews of a tour, newest first, with the average rating."""
    try:
        reviews, average = await ReviewService(db).approved_for_tour(request.tour_id)
        return json_response(TourReviews(
            items=[_convert_review_to_schema(r) for r in reviews],
            review_count=len(reviews),
            average_rating=average,
        ))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error listing reviews", e, tour_id=request.tour_id) from e


@router.post("/submit", response_model=Review, status_code=201)
async def submit_review(
    request: SubmitReviewRequest,
    db: AsyncSession = DB_DEPENDENCY,
) -> JSONResponse:
    """Leave a review; it is shown once approved."""
    try:
        review = await ReviewService(db).submit(request)
        return json_response(_convert_review_to_schema(review), status_code=201)

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error submitting review", e, tour_id=request.tour_id) from e


@router.post("/search", response_model=ReviewList)
async def search_reviews(
    request: SearchReviewsRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """List reviews for moderation."""
    try:
        reviews = await ReviewService(db).search(request)
        return json_response(ReviewList(items=[_convert_review_to_schema(r) for r in reviews]))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in review search", e) from e


@router.post("/approve", response_model=Review)
async def approve_review(
    request: ApproveReviewRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Approve a review or hide it again."""
    try:
        review = await ReviewService(db).set_approved(request)
        return json_response(_convert_review_to_schema(review))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error moderating review", e, review_id=request.id) from e


@router.post("/delete", response_model=DeleteResponse)
async def delete_review(
    request: DeleteRequest,
    db: AsyncSession = DB_DEPENDENCY,
    user: dict = AdminAuth,
) -> JSONResponse:
    """Permanently delete a review; requires ``confirm: true``."""
    try:
        await ReviewService(db).delete(request.id, request.confirm)
        return json_response(DeleteResponse(id=request.id, deleted=True))

    except ProblemDetailsException:
        raise

    except Exception as e:
        raise unexpected_error(logger, "Unexpected error in review deletion", e, review_id=request.id) from e
