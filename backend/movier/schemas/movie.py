from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

class MovieCreate(BaseModel):
    """Manually added movie"""
    title: str
    year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None

class MovieImport(BaseModel):
    """Import request for an external catalog movie"""
    external_id: int = Field(..., description="External catalog (TMDB) movie ID")

class MovieResponse(BaseModel):
    """Catalog movie with its rating aggregate"""
    id: int
    title: str
    year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    created_by: Optional[int] = None
    external_source: Optional[str] = None
    external_id: Optional[str] = None
    created_at: Optional[datetime] = None
    avg_rating: float = 0
    review_count: int = 0
    
    class Config:
        from_attributes = True

class ExternalMovie(BaseModel):
    """External catalog search hit"""
    external_id: str
    title: str
    year: Optional[int] = None
    description: str = ""
    poster_url: Optional[str] = None

class ExternalSearchResponse(BaseModel):
    movies: List[ExternalMovie]
    total: int
    query: str
