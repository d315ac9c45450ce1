from typing import List, Tuple
from sqlalchemy.orm import Session
from movier.repositories.base_repository import BaseRepository, EXCLUDED
from movier.models.watchlist import WatchlistEntry
from movier.models.movie import Movie

class WatchlistRepository(BaseRepository[WatchlistEntry]):
    """Repository for watchlist entries"""
    
    def __init__(self, db: Session):
        super().__init__(WatchlistEntry, db)
    
    def upsert_status(self, user_id: int, movie_id: int, status: str) -> None:
        """Add the movie to the watchlist or change its status; added_at keeps its first value"""
        self.upsert(
            values={"user_id": user_id, "movie_id": movie_id, "status": status},
            conflict_columns=["user_id", "movie_id"],
            update_values={"status": EXCLUDED},
        )
    
    def remove(self, user_id: int, movie_id: int) -> int:
        return self.delete_where(user_id=user_id, movie_id=movie_id)
    
    def list_for_user(self, user_id: int) -> List[Tuple[WatchlistEntry, Movie]]:
        """A user's watchlist joined with movie data, most recently added first"""
        return (
            self.db.query(WatchlistEntry, Movie)
            .join(Movie, Movie.id == WatchlistEntry.movie_id)
            .filter(WatchlistEntry.user_id == user_id)
            .order_by(WatchlistEntry.added_at.desc(), WatchlistEntry.id.desc())
            .all()
        )
