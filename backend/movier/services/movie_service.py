import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movier.core.config import get_settings
from movier.core.exceptions import ValidationError
from movier.core.interfaces import MovieCatalogInterface
from movier.core.tmdb_service import get_movie_catalog
from movier.repositories.movie_repository import MovieRepository
from movier.schemas.movie import MovieResponse, ExternalMovie, ExternalSearchResponse
from movier.services.rating_service import RatingAggregator

logger = logging.getLogger(__name__)

MIN_YEAR = 1880
SEARCH_RESULT_LIMIT = 20

SAMPLE_MOVIES = [
    ("Parasite", 2019, "Drama, Thriller",
     "A poor family schemes its way into a wealthy household, exposing the gulf between social classes."),
    ("Interstellar", 2014, "Science Fiction, Drama",
     "An epic about relative time and the human will to survive among the stars."),
    ("La La Land", 2016, "Musical, Romance",
     "Two artists fall in love while torn between their dreams and each other."),
    ("Spirited Away", 2001, "Fantasy, Animation",
     "A classic animated tale of identity and growing up."),
]


def parse_year(release_date: Optional[str]) -> Optional[int]:
    """Year from the first four characters of a YYYY-MM-DD release date"""
    if not release_date or not release_date[:4].isdigit():
        return None
    return int(release_date[:4])


class MovieService:
    """Catalog writes: manual add, external catalog search and import"""
    
    def __init__(self, db: Session, catalog: Optional[MovieCatalogInterface] = None):
        self.db = db
        self.settings = get_settings()
        self.movie_repository = MovieRepository(db)
        self.ratings = RatingAggregator(db)
        self.catalog = catalog or get_movie_catalog()
    
    def _poster_url(self, poster_path: Optional[str]) -> Optional[str]:
        return f"{self.settings.TMDB_IMAGE_BASE}{poster_path}" if poster_path else None
    
    def create_movie(self, user_id: int, title: str, year: Optional[int] = None, genre: Optional[str] = None,
                     description: Optional[str] = None, poster_url: Optional[str] = None) -> MovieResponse:
        """Add a movie by hand"""
        title = (title or "").strip()
        if not title:
            raise ValidationError("Movie title is required")
        max_year = datetime.now().year + 5
        if year is not None and (year < MIN_YEAR or year > max_year):
            raise ValidationError(f"Release year must be between {MIN_YEAR} and {max_year}")
        
        movie = self.movie_repository.create({
            "title": title,
            "year": year,
            "genre": (genre or "").strip(),
            "description": (description or "").strip(),
            "poster_url": (poster_url or "").strip() or None,
            "created_by": user_id,
        })
        logger.info(f"Movie {movie.id} added by user {user_id}")
        return MovieResponse.model_validate(movie)
    
    def search_external(self, query: str) -> ExternalSearchResponse:
        """Search the external catalog"""
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required")
        
        hits = [hit for hit in self.catalog.search(query) if hit and (hit.get("title") or hit.get("name"))]
        movies = [
            ExternalMovie(
                external_id=str(hit["id"]),
                title=hit.get("title") or hit.get("name") or "",
                year=parse_year(hit.get("release_date")),
                description=hit.get("overview") or "",
                poster_url=self._poster_url(hit.get("poster_path")),
            )
            for hit in hits[:SEARCH_RESULT_LIMIT]
        ]
        return ExternalSearchResponse(movies=movies, total=len(hits), query=query)
    
    def map_external_detail(self, detail: Dict[str, Any]) -> Dict[str, Any]:
        genres = detail.get("genres") or []
        return {
            "title": detail.get("title") or detail.get("name") or "",
            "year": parse_year(detail.get("release_date")),
            "genre": ", ".join(genre["name"] for genre in genres if genre.get("name")),
            "description": detail.get("overview") or "",
            "poster_url": self._poster_url(detail.get("poster_path")),
        }
    
    def import_from_external(self, external_id: int, user_id: Optional[int] = None) -> Tuple[MovieResponse, bool]:
        """Import a movie from the external catalog.

        Returns (movie, created). An already imported movie is returned unchanged
        with created=False, including when a concurrent import inserts it first.
        """
        if isinstance(external_id, bool) or not isinstance(external_id, int) or external_id <= 0:
            raise ValidationError("External movie ID must be a positive integer")
        
        source = self.settings.EXTERNAL_SOURCE
        key = str(external_id)
        
        existing = self.movie_repository.get_by_external(source, key)
        if existing:
            return self.ratings.get_movie(existing.id), False
        
        detail = self.catalog.detail(external_id)
        values = self.map_external_detail(detail)
        values.update({
            "created_by": user_id,
            "external_source": source,
            "external_id": key,
        })
        
        try:
            movie = self.movie_repository.create(values)
        except IntegrityError:
            self.db.rollback()
            existing = self.movie_repository.get_by_external(source, key)
            if existing is None:
                raise
            logger.warning(f"Concurrent import of {source}:{key} resolved to movie {existing.id}")
            return self.ratings.get_movie(existing.id), False
        
        logger.info(f"Imported {source}:{key} as movie {movie.id}")
        return MovieResponse.model_validate(movie), True
    
    def seed_movies(self) -> int:
        """Insert the sample movies into an empty catalog"""
        if self.movie_repository.count() > 0:
            return 0
        for title, year, genre, description in SAMPLE_MOVIES:
            self.db.add(self.movie_repository.model(
                title=title,
                year=year,
                genre=genre,
                description=description,
            ))
        self.db.commit()
        logger.info(f"Seeded {len(SAMPLE_MOVIES)} movies")
        return len(SAMPLE_MOVIES)
