from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from movier.core.exceptions import handle_exception
from movier.core.interfaces import MovieCatalogInterface
from movier.core.tmdb_service import get_movie_catalog
from movier.db import get_db
from movier.schemas.movie import ExternalSearchResponse
from movier.services.movie_service import MovieService

router = APIRouter(prefix="/external", tags=["external catalog"])

@router.get("/movies/search", response_model=ExternalSearchResponse)
def search_external_movies(
    q: str = Query("", description="Search query"),
    db: Session = Depends(get_db),
    catalog: MovieCatalogInterface = Depends(get_movie_catalog)
):
    try:
        return MovieService(db, catalog).search_external(q)
    except Exception as e:
        raise handle_exception(e)
