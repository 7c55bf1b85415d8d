import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.models import (
    MeResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    Token,
    UserResponse,
)
from auth.schemas import User
from common.auth_utils import create_access_token, get_current_user
from common.database import get_db
from common.helpers import db_connection_handler

logger = logging.getLogger(__name__)

auth = APIRouter()


def get_user_by_wallet(db: Session, wallet_address: str):
    return db.query(User).filter(User.wallet_address == wallet_address).first()


@auth.post(
    "/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED
)
@db_connection_handler
async def sign_up(user: SignUpRequest, db: Session = Depends(get_db)):
    if get_user_by_wallet(db, user.wallet_address):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Wallet address already registered",
        )

    new_user = User(wallet_address=user.wallet_address, role=user.role)
    try:
        db.add(new_user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Wallet address already registered",
        )
    db.refresh(new_user)
    logger.info("Registered %s wallet %s", new_user.role, new_user.wallet_address)

    return SignUpResponse(
        message="User registered successfully",
        user_id=new_user.id,
        user=UserResponse.model_validate(new_user),
    )


@auth.post("/sign-in", response_model=Token)
@db_connection_handler
async def sign_in(credentials: SignInRequest, db: Session = Depends(get_db)):
    user = get_user_by_wallet(db, credentials.wallet_address)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found. Please sign up first.",
        )

    return Token(
        message="Sign-in successful",
        access_token=create_access_token(user),
        user=UserResponse.model_validate(user),
    )


@auth.get("/me", response_model=MeResponse)
@db_connection_handler
async def get_me(user: User = Depends(get_current_user)):
    return MeResponse(user=UserResponse.model_validate(user))
