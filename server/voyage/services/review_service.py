"""Tour reviews: public listing, visitor submissions and moderation."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError
from ..models.review import Review
from ..models.tour import Tour
from ..schemas.review import ApproveReviewRequest, SearchReviewsRequest, SubmitReviewRequest
from .identifiers import parse_uuid

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for tour reviews."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _published_tour(self, tour_id: str) -> Tour:
        tour = await self.db.get(Tour, parse_uuid(tour_id, "tour"))
        if tour is None or not tour.is_published:
            raise NotFoundError(resource_type="tour", resource_id=tour_id)
        return tour

    async def approved_for_tour(self, tour_id: str) -> tuple[list[Review], Optional[float]]:
        """
        Approved reviews of a published tour, newest first, with their mean rating.

        The mean is rounded to one decimal and is ``None`` when there are no
        approved reviews.
        """
        tour = await self._published_tour(tour_id)

        stmt = (
            select(Review)
            .where(Review.tour_id == tour.id, Review.is_approved.is_(True))
            .order_by(Review.created_at.desc(), Review.id)
        )
        reviews = list((await self.db.execute(stmt)).scalars().all())

        average = None
        if reviews:
            average = round(sum(review.rating for review in reviews) / len(reviews), 1)
        return reviews, average

    async def submit(self, request: SubmitReviewRequest) -> Review:
        """
        Store a visitor review; it stays hidden until approved.

        Raises:
            ValidationError: If the name or comment is blank
            NotFoundError: If the tour does not exist or is not published
        """
        missing = [field for field in ("name", "comment") if not getattr(request, field).strip()]
        if missing:
            raise ValidationError(
                detail="Please add your name and comment",
                violations=[{"path": field, "message": "Field required"} for field in missing]
            )

        tour = await self._published_tour(request.tour_id)

        review = Review(
            tour_id=tour.id,
            name=request.name.strip(),
            rating=request.rating,
            comment=request.comment.strip(),
            is_approved=False,
        )
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review)

        logger.info(
            "Review submitted",
            extra={"review_id": str(review.id), "tour_id": str(tour.id), "rating": review.rating}
        )
        return review

    async def search(self, request: SearchReviewsRequest) -> list[Review]:
        """List reviews for moderation, newest first."""
        stmt = select(Review)

        if request.status != "all":
            stmt = stmt.where(Review.is_approved.is_(request.status == "approved"))
        if request.tour_id:
            stmt = stmt.where(Review.tour_id == parse_uuid(request.tour_id, "tour"))

        stmt = stmt.order_by(Review.created_at.desc(), Review.id).limit(request.limit)
        return list((await self.db.execute(stmt)).scalars().all())

    async def get_review_or_raise(self, review_id: str) -> Review:
        review = await self.db.get(Review, parse_uuid(review_id, "review"))
        if review is None:
            raise NotFoundError(resource_type="review", resource_id=review_id)
        return review

    async def set_approved(self, request: ApproveReviewRequest) -> Review:
        """Approve a review, or hide an approved one again."""
        review = await self.get_review_or_raise(request.id)
        review.is_approved = request.is_approved
        await self.db.commit()
        await self.db.refresh(review)

        logger.info(
            "Review moderated",
            extra={"review_id": request.id, "is_approved": review.is_approved}
        )
        return review

    async def delete(self, review_id: str, confirm: bool) -> None:
        """
        Hard-delete a review.

        Raises:
            ValidationError: If ``confirm`` is not set
            NotFoundError: If the review does not exist
        """
        if not confirm:
            raise ValidationError(
                detail="Deleting a review is permanent and must be confirmed",
                violations=[{"path": "confirm", "message": "Must be true"}]
            )

        review = await self.get_review_or_raise(review_id)
        await self.db.delete(review)
        await self.db.commit()

        logger.info("Review deleted", extra={"review_id": review_id})

