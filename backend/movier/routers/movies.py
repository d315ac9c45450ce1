from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from movier.core.auth import get_current_user
from movier.core.exceptions import handle_exception
from movier.core.interfaces import MovieCatalogInterface
from movier.core.tmdb_service import get_movie_catalog
from movier.db import get_db
from movier.schemas.movie import MovieCreate, MovieImport, MovieResponse
from movier.schemas.review import ReviewCreate, ReviewResponse
from movier.schemas.watchlist import WatchlistStatusUpdate, WatchlistStatusResponse
from movier.services.movie_service import MovieService
from movier.services.rating_service import RatingAggregator
from movier.services.review_service import ReviewService
from movier.services.watchlist_service import WatchlistService

router = APIRouter(prefix="/movies", tags=["movies"])

@router.get("", response_model=List[MovieResponse])
def list_movies(
    search: Optional[str] = Query(None, description="Substring of title, genre or description"),
    db: Session = Depends(get_db)
):
    try:
        return RatingAggregator(db).list_movies(search)
    except Exception as e:
        raise handle_exception(e)

@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
def create_movie(
    movie_data: MovieCreate,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog)
):
    try:
        return MovieService(db, catalog).create_movie(
            current_user_id,
            title=movie_data.title,
            year=movie_data.year,
            genre=movie_data.genre,
            description=movie_data.description,
            poster_url=movie_data.poster_url,
        )
    except Exception as e:
        raise handle_exception(e)

@router.post("/import", response_model=MovieResponse)
def import_movie(
    import_data: MovieImport,
    response: Response,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog)
):
    try:
        movie, created = MovieService(db, catalog).import_from_external(import_data.external_id, current_user_id)
        response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return movie
    except Exception as e:
        raise handle_exception(e)

@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(movie_id: int, db: Session = Depends(get_db)):
    try:
        return RatingAggregator(db).get_movie(movie_id)
    except Exception as e:
        raise handle_exception(e)

# Reviews
@router.get("/{movie_id}/reviews", response_model=List[ReviewResponse])
def list_movie_reviews(movie_id: int, db: Session = Depends(get_db)):
    try:
        return ReviewService(db).list_reviews_for_movie(movie_id)
    except Exception as e:
        raise handle_exception(e)

@router.post("/{movie_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def submit_review(
    movie_id: int,
    review_data: ReviewCreate,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return ReviewService(db).submit_review(
            current_user_id,
            movie_id,
            review_data.rating,
            review_text=review_data.review_text,
            watched_on=review_data.watched_on,
        )
    except Exception as e:
        raise handle_exception(e)

# Watchlist
@router.post("/{movie_id}/watchlist", response_model=WatchlistStatusResponse)
def set_watchlist_status(
    movie_id: int,
    watchlist_data: WatchlistStatusUpdate,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        return WatchlistService(db).set_status(current_user_id, movie_id, watchlist_data.status)
    except Exception as e:
        raise handle_exception(e)
