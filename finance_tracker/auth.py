"""Password hashing, session login and the account endpoints."""

import logging

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, status

from finance_tracker.schemas import (
    LoginRequest,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    UserCreate,
    UserRead,
)
from finance_tracker.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

SESSION_KEY = "user_id"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def current_user(request: Request, storage: Storage = Depends(get_storage)) -> UserRead:
    user_id = request.session.get(SESSION_KEY)
    user = storage.get_user(user_id) if user_id is not None else None
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def _login(request: Request, user: UserRead) -> None:
    request.session.clear()
    request.session[SESSION_KEY] = user.id


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(req: UserCreate, request: Request, storage: Storage = Depends(get_storage)):
    if storage.get_user_by_username(req.username):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already exists")

    user = storage.create_user(req, hash_password(req.password))
    _login(request, user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


@router.post("/login", response_model=UserRead)
def login(req: LoginRequest, request: Request, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_username(req.username)
    if user is None or not verify_password(req.password, user.password_hash):
        logger.warning("Failed login for username %r", req.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    _login(request, user)
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    request.session.clear()
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserRead)
def me(user: UserRead = Depends(current_user)):
    return user


def _own_account(user_id: int, user: UserRead) -> None:
    if user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.patch("/users/{user_id}", response_model=UserRead)
def update_profile(
    user_id: int,
    req: ProfileUpdate,
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    _own_account(user_id, user)
    return storage.update_user(user.id, full_name=req.full_name)


@router.post("/users/{user_id}/password", response_model=MessageResponse)
def change_password(
    user_id: int,
    req: PasswordChange,
    user: UserRead = Depends(current_user),
    storage: Storage = Depends(get_storage),
):
    _own_account(user_id, user)
    if not verify_password(req.current_password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    storage.update_user(user.id, password_hash=hash_password(req.new_password))
    logger.info("Password changed for user id=%s", user.id)
    return MessageResponse(message="Password updated")
