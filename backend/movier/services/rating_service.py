from typing import List, Optional
from sqlalchemy.orm import Session
from movier.core.exceptions import NotFoundError
from movier.repositories.movie_repository import MovieRepository, MovieWithRating
from movier.schemas.movie import MovieResponse


def to_movie_response(row: MovieWithRating) -> MovieResponse:
    movie, avg_rating, review_count = row
    response = MovieResponse.model_validate(movie)
    response.avg_rating = float(avg_rating or 0)
    response.review_count = int(review_count or 0)
    return response


class RatingAggregator:
    """Read side of the catalog: movies with avg_rating and review_count computed on every read"""
    
    def __init__(self, db: Session):
        self.db = db
        self.movie_repository = MovieRepository(db)
    
    def list_movies(self, search: Optional[str] = None) -> List[MovieResponse]:
        search = (search or "").strip() or None
        return [to_movie_response(row) for row in self.movie_repository.list_with_ratings(search)]
    
    def get_movie(self, movie_id: int) -> MovieResponse:
        row = self.movie_repository.get_with_rating(movie_id)
        if row is None:
            raise NotFoundError("Movie not found")
        return to_movie_response(row)
