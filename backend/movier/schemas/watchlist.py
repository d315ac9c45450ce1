from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class WatchlistStatusUpdate(BaseModel):
    status: str = Field("plan_to_watch", description="'plan_to_watch', 'watching', or 'completed'")

class WatchlistStatusResponse(BaseModel):
    movie_id: int
    status: str

class WatchlistItemResponse(BaseModel):
    """Watchlist entry joined with movie data"""
    movie_id: int
    status: str
    added_at: Optional[datetime] = None
    title: str
    year: Optional[int] = None
    poster_url: Optional[str] = None
