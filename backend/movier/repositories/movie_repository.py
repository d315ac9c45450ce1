from typing import Any, List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query
from movier.repositories.base_repository import BaseRepository
from movier.models.movie import Movie
from movier.models.review import Review

# (movie, avg_rating, review_count)
MovieWithRating = Tuple[Movie, Any, int]

class MovieRepository(BaseRepository[Movie]):
    """Movie repository; every read carries the rating aggregate"""
    
    def __init__(self, db: Session):
        super().__init__(Movie, db)
    
    def _with_ratings(self) -> Query:
        # One grouped LEFT JOIN over reviews, never a query per movie
        avg_rating = func.coalesce(func.round(func.avg(Review.rating), 1), 0).label("avg_rating")
        review_count = func.count(Review.id).label("review_count")
        return (
            self.db.query(Movie, avg_rating, review_count)
            .outerjoin(Review, Review.movie_id == Movie.id)
            .group_by(Movie.id)
        )
    
    def list_with_ratings(self, search: Optional[str] = None) -> List[MovieWithRating]:
        """List movies newest first, optionally filtered by a substring"""
        query = self._with_ratings()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Movie.title.ilike(pattern),
                Movie.genre.ilike(pattern),
                Movie.description.ilike(pattern),
            ))
        return query.order_by(Movie.created_at.desc(), Movie.id.desc()).all()
    
    def get_with_rating(self, movie_id: int) -> Optional[MovieWithRating]:
        """Get one movie with its aggregate"""
        return self._with_ratings().filter(Movie.id == movie_id).first()
    
    def get_by_external(self, external_source: str, external_id: str) -> Optional[Movie]:
        """Get movie by provenance key"""
        return self.filter_one_by(external_source=external_source, external_id=external_id)
    
    def movie_exists(self, movie_id: int) -> bool:
        return self.exists(id=movie_id)
