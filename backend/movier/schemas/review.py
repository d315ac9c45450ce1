from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

class ReviewCreate(BaseModel):
    """Create or replace the caller's review of a movie"""
    rating: int
    review_text: Optional[str] = None
    watched_on: Optional[date] = None

class ReviewResponse(BaseModel):
    """Review joined with its author's username"""
    id: int
    user_id: int
    movie_id: int
    username: str
    rating: int
    review_text: Optional[str] = None
    watched_on: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class UserReviewResponse(BaseModel):
    """Review joined with the reviewed movie's title"""
    id: int
    movie_id: int
    title: str
    rating: int
    review_text: Optional[str] = None
    watched_on: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
