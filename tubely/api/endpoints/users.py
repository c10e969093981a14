"""
User, login and token endpoints
"""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import IntegrityError

from tubely.api.deps import get_store
from tubely.core.auth import (
    AuthError,
    check_password_hash,
    get_bearer_token,
    hash_password,
    make_jwt,
    make_refresh_token,
)
from tubely.core.config import settings
from tubely.schemas.user import LoginResponse, TokenResponse, UserCreate, UserResponse
from tubely.services.metadata_store import MetadataStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _access_token_for(user_id) -> str:
    return make_jwt(user_id, settings.JWT_SECRET, timedelta(seconds=settings.ACCESS_TOKEN_TTL_SECONDS))


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreate, store: MetadataStore = Depends(get_store)):
    """Register a new user"""
    try:
        user = store.create_user(payload.email, hash_password(payload.password))
    except IntegrityError:
        store.db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")

    logger.info("Created user %s", user.id)
    return user


@router.post("/login", response_model=LoginResponse)
def login(payload: UserCreate, store: MetadataStore = Depends(get_store)):
    """Exchange email and password for an access token and a refresh token"""
    user = store.get_user_by_email(payload.email)
    if user is None or not check_password_hash(payload.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Incorrect email or password")

    refresh_token = make_refresh_token()
    store.create_refresh_token(refresh_token, user.id)

    return LoginResponse(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        email=user.email,
        token=_access_token_for(user.id),
        refresh_token=refresh_token,
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(request: Request, store: MetadataStore = Depends(get_store)):
    """Issue a new access token for a valid refresh token"""
    try:
        token = get_bearer_token(request.headers)
    except AuthError:
        raise HTTPException(status_code=401, detail="Couldn't find token")

    user = store.get_user_for_refresh_token(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Couldn't validate refresh token")

    return TokenResponse(token=_access_token_for(user.id))


@router.post("/revoke", status_code=204)
def revoke(request: Request, store: MetadataStore = Depends(get_store)):
    """Revoke a refresh token"""
    try:
        token = get_bearer_token(request.headers)
    except AuthError:
        raise HTTPException(status_code=401, detail="Couldn't find token")

    if not store.revoke_refresh_token(token):
        raise HTTPException(status_code=401, detail="Couldn't revoke refresh token")
    return Response(status_code=204)
