from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from movier.repositories.base_repository import BaseRepository, EXCLUDED
from movier.models.review import Review
from movier.models.user import User
from movier.models.movie import Movie

class ReviewRepository(BaseRepository[Review]):
    """Repository for the review ledger"""
    
    def __init__(self, db: Session):
        super().__init__(Review, db)
    
    def upsert_review(self, user_id: int, movie_id: int, rating: int,
                      review_text: Optional[str] = None, watched_on: Optional[date] = None) -> None:
        """Insert the user's review of a movie, or overwrite the existing one in place"""
        self.upsert(
            values={
                "user_id": user_id,
                "movie_id": movie_id,
                "rating": rating,
                "review_text": review_text,
                "watched_on": watched_on,
            },
            conflict_columns=["user_id", "movie_id"],
            update_values={
                "rating": EXCLUDED,
                "review_text": EXCLUDED,
                "watched_on": EXCLUDED,
                "updated_at": func.now(),
            },
        )
    
    def get_with_username(self, user_id: int, movie_id: int) -> Optional[Tuple[Review, str]]:
        """Get the user's review of a movie joined with the author's username"""
        return (
            self.db.query(Review, User.username)
            .join(User, User.id == Review.user_id)
            .filter(Review.user_id == user_id, Review.movie_id == movie_id)
            .first()
        )
    
    def delete_owned(self, review_id: int, user_id: int) -> int:
        """Delete a review only if user_id owns it"""
        return self.delete_where(id=review_id, user_id=user_id)
    
    def list_for_movie(self, movie_id: int) -> List[Tuple[Review, str]]:
        """Reviews of a movie with author usernames, newest first"""
        return (
            self.db.query(Review, User.username)
            .join(User, User.id == Review.user_id)
            .filter(Review.movie_id == movie_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )
    
    def list_for_user(self, user_id: int) -> List[Tuple[Review, str]]:
        """A user's reviews with movie titles, newest first"""
        return (
            self.db.query(Review, Movie.title)
            .join(Movie, Movie.id == Review.movie_id)
            .filter(Review.user_id == user_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )
