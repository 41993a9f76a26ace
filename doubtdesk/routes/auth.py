"""Authentication routes."""
import re
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, field_validator
from sqlalchemy.exc import IntegrityError

from doubtdesk.core.dependencies import DoubtRepositoryDep
from doubtdesk.core.security import (
    get_password_hash,
    verify_password,
    create_user_token,
    get_current_user,
)
from doubtdesk.domain.identity import Role
from doubtdesk.models.user import User


router = APIRouter(prefix="/auth", tags=["Authentication"])

PASSWORD_PATTERN = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


# Request/Response schemas
class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: Role = Role.STUDENT

    @field_validator("name")
    @classmethod
    def name_long_enough(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("password")
    @classmethod
    def password_strong_enough(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        if not PASSWORD_PATTERN.match(value):
            raise ValueError("Password must contain uppercase, lowercase, and number")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    name: str
    email: str
    role: Role


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    created_at: str


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_user_token(user),
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, repository: DoubtRepositoryDep):
    """
    Register a new student or instructor.

    - Creates user account with hashed password
    - Role is fixed at registration
    - Returns JWT access token
    """
    if repository.get_user_by_email(request.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        user = repository.create_user(
            name=request.name,
            email=request.email,
            password_hash=get_password_hash(request.password),
            role=request.role,
        )
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, repository: DoubtRepositoryDep):
    """
    Login with email and password.

    - Validates credentials
    - Returns JWT access token
    """
    user = repository.get_user_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """
    Get current authenticated user information.

    Protected endpoint - requires valid JWT token.
    """
    return UserResponse(
        id=str(current_user.id),
        name=current_user.name,
        email=current_user.email,
        role=current_user.role,
        created_at=current_user.created_at.isoformat()
    )
