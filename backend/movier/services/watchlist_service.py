import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movier.core.exceptions import ValidationError, NotFoundError
from movier.models.watchlist import WatchlistStatus
from movier.repositories.movie_repository import MovieRepository
from movier.repositories.watchlist_repository import WatchlistRepository
from movier.schemas.watchlist import WatchlistStatusResponse, WatchlistItemResponse

logger = logging.getLogger(__name__)


class WatchlistService:
    """Watchlist tracker: one status row per (user, movie)"""
    
    def __init__(self, db: Session):
        self.db = db
        self.watchlist_repository = WatchlistRepository(db)
        self.movie_repository = MovieRepository(db)
    
    def set_status(self, user_id: int, movie_id: int, status: str) -> WatchlistStatusResponse:
        """Add a movie to the watchlist or change its status"""
        status = (status or "").strip()
        if status not in WatchlistStatus.values():
            raise ValidationError(f"Watchlist status must be one of: {', '.join(WatchlistStatus.values())}")
        if not self.movie_repository.movie_exists(movie_id):
            raise NotFoundError("Movie not found")
        
        try:
            self.watchlist_repository.upsert_status(user_id, movie_id, status)
        except IntegrityError:
            self.db.rollback()
            raise NotFoundError("Movie not found")
        
        logger.info(f"Watchlist status set: user={user_id} movie={movie_id} status={status}")
        return WatchlistStatusResponse(movie_id=movie_id, status=status)
    
    def remove(self, user_id: int, movie_id: int) -> None:
        """Remove a movie from the watchlist; removing an absent entry is a no-op"""
        if self.watchlist_repository.remove(user_id, movie_id):
            logger.info(f"Watchlist entry removed: user={user_id} movie={movie_id}")
    
    def list_for_user(self, user_id: int) -> List[WatchlistItemResponse]:
        return [
            WatchlistItemResponse(
                movie_id=entry.movie_id,
                status=entry.status,
                added_at=entry.added_at,
                title=movie.title,
                year=movie.year,
                poster_url=movie.poster_url,
            )
            for entry, movie in self.watchlist_repository.list_for_user(user_id)
        ]
