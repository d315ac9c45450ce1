from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from movier.repositories.base_repository import BaseRepository
from movier.models.user import User

class UserRepository(BaseRepository[User]):
    """User repository with user-specific operations"""
    
    def __init__(self, db: Session):
        super().__init__(User, db)
    
    def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Get user by username or email"""
        return self.db.query(User).filter(
            or_(User.username == identifier, User.email == identifier)
        ).first()
    
    def username_or_email_exists(self, username: str, email: str) -> bool:
        """Check if either the username or the email is taken"""
        return self.db.query(User.id).filter(
            or_(User.username == username, User.email == email)
        ).first() is not None
    
    def create_user(self, username: str, email: str, password_hash: str) -> User:
        """Create new user"""
        return self.create({
            "username": username,
            "email": email,
            "password_hash": password_hash,
        })
