import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movier.core.auth import create_access_token, get_password_hash, verify_password
from movier.core.exceptions import (
    ValidationError, ConflictError, InvalidCredentialsError, NotFoundError
)
from movier.models.user import User
from movier.repositories.user_repository import UserRepository
from movier.schemas.user import AuthResponse, UserResponse

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

class UserService:
    """Registration, login and bearer token issuance"""
    
    def __init__(self, db: Session):
        self.db = db
        self.user_repository = UserRepository(db)
    
    def _issue(self, user: User) -> AuthResponse:
        token = create_access_token(data={"sub": str(user.id), "username": user.username})
        return AuthResponse(token=token, user=UserResponse.model_validate(user))
    
    def register(self, username: str, email: str, password: str) -> AuthResponse:
        """Create a new user and return a token for it"""
        username = (username or "").strip()
        email = (email or "").strip().lower()
        password = (password or "").strip()
        
        if not username or not email or not password:
            raise ValidationError("Username, email and password are all required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.user_repository.username_or_email_exists(username, email):
            raise ConflictError("Username or email is already in use")
        
        try:
            user = self.user_repository.create_user(
                username=username,
                email=email,
                password_hash=get_password_hash(password),
            )
        except IntegrityError:
            # A concurrent registration won the unique constraint
            self.db.rollback()
            logger.warning(f"Registration race lost for username={username}")
            raise ConflictError("Username or email is already in use")
        
        logger.info(f"User created successfully with ID: {user.id}")
        return self._issue(user)
    
    def login(self, identifier: str, password: str) -> AuthResponse:
        """Authenticate by username or email"""
        identifier = (identifier or "").strip()
        password = (password or "").strip()
        if not identifier or not password:
            raise ValidationError("Identifier and password are both required")
        
        user = self.user_repository.get_by_identifier(identifier)
        if not user or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Login details do not match")
        
        return self._issue(user)
    
    def get_user(self, user_id: int) -> UserResponse:
        user = self.user_repository.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)
