from movier.db import Base
from .user import User
from .movie import Movie
from .review import Review
from .watchlist import WatchlistEntry, WatchlistStatus

__all__ = ['Base', 'User', 'Movie', 'Review', 'WatchlistEntry', 'WatchlistStatus']
