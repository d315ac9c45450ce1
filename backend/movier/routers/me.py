from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from movier.core.auth import get_current_user
from movier.core.exceptions import handle_exception
from movier.db import get_db
from movier.schemas.review import UserReviewResponse
from movier.schemas.watchlist import WatchlistItemResponse
from movier.services.review_service import ReviewService
from movier.services.watchlist_service import WatchlistService

router = APIRouter(tags=["me"])

@router.get("/me/reviews", response_model=List[UserReviewResponse])
def get_my_reviews(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return ReviewService(db).list_reviews_for_user(current_user_id)
    except Exception as e:
        raise handle_exception(e)

@router.delete("/reviews/{review_id}")
def delete_review(review_id: int, current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        ReviewService(db).delete_review(review_id, current_user_id)
        return {"success": True}
    except Exception as e:
        raise handle_exception(e)

@router.get("/me/watchlist", response_model=List[WatchlistItemResponse])
def get_my_watchlist(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return WatchlistService(db).list_for_user(current_user_id)
    except Exception as e:
        raise handle_exception(e)

@router.delete("/me/watchlist/{movie_id}")
def remove_from_watchlist(movie_id: int, current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        WatchlistService(db).remove(current_user_id, movie_id)
        return {"success": True}
    except Exception as e:
        raise handle_exception(e)
