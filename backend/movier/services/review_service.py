import logging
from datetime import date
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movier.core.exceptions import ValidationError, NotFoundError
from movier.models.review import Review, RATING_MIN, RATING_MAX
from movier.repositories.movie_repository import MovieRepository
from movier.repositories.review_repository import ReviewRepository
from movier.schemas.review import ReviewResponse, UserReviewResponse

logger = logging.getLogger(__name__)


def _to_response(review: Review, username: str) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        user_id=review.user_id,
        movie_id=review.movie_id,
        username=username,
        rating=review.rating,
        review_text=review.review_text,
        watched_on=review.watched_on,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}")
    if rating < RATING_MIN or rating > RATING_MAX:
        raise ValidationError(f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}")
    return rating


class ReviewService:
    """Review ledger: at most one review per (user, movie), replaced in place on resubmission"""
    
    def __init__(self, db: Session):
        self.db = db
        self.review_repository = ReviewRepository(db)
        self.movie_repository = MovieRepository(db)
    
    def _require_movie(self, movie_id: int) -> None:
        if not self.movie_repository.movie_exists(movie_id):
            raise NotFoundError("Movie not found")
    
    def submit_review(self, user_id: int, movie_id: int, rating: int,
                      review_text: Optional[str] = None, watched_on: Optional[date] = None) -> ReviewResponse:
        """Create the user's review of a movie or overwrite the existing one"""
        rating = validate_rating(rating)
        self._require_movie(movie_id)
        review_text = (review_text or "").strip() or None
        
        try:
            self.review_repository.upsert_review(user_id, movie_id, rating, review_text, watched_on)
        except IntegrityError:
            # The movie or user vanished between the existence check and the upsert
            self.db.rollback()
            if not self.movie_repository.movie_exists(movie_id):
                raise NotFoundError("Movie not found")
            raise NotFoundError("User not found")
        
        row = self.review_repository.get_with_username(user_id, movie_id)
        if row is None:
            raise NotFoundError("User not found")
        logger.info(f"Review upserted: user={user_id} movie={movie_id} rating={rating}")
        return _to_response(*row)
    
    def delete_review(self, review_id: int, requesting_user_id: int) -> None:
        """Delete a review owned by the requester; anyone else's review reads as missing"""
        if self.review_repository.delete_owned(review_id, requesting_user_id) == 0:
            raise NotFoundError("Review not found")
        logger.info(f"Review {review_id} deleted by user {requesting_user_id}")
    
    def list_reviews_for_movie(self, movie_id: int) -> List[ReviewResponse]:
        self._require_movie(movie_id)
        return [
            _to_response(review, username)
            for review, username in self.review_repository.list_for_movie(movie_id)
        ]
    
    def list_reviews_for_user(self, user_id: int) -> List[UserReviewResponse]:
        return [
            UserReviewResponse(
                id=review.id,
                movie_id=review.movie_id,
                title=title,
                rating=review.rating,
                review_text=review.review_text,
                watched_on=review.watched_on,
                created_at=review.created_at,
                updated_at=review.updated_at,
            )
            for review, title in self.review_repository.list_for_user(user_id)
        ]
