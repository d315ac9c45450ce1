from .base_repository import BaseRepository
from .user_repository import UserRepository
from .movie_repository import MovieRepository
from .review_repository import ReviewRepository
from .watchlist_repository import WatchlistRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "MovieRepository",
    "ReviewRepository",
    "WatchlistRepository"
]
