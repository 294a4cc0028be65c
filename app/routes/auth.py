from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_current_account
from app.controllers.auth_controller import login, change_password, get_profile
from app.schemas.account_schema import AccountLogin, TokenResponse, AccountProfile, PasswordChange

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login_route(payload: AccountLogin, db: Session = Depends(get_db)):
    return login(db, payload)


@router.get("/me", response_model=AccountProfile)
def me_route(account=Depends(get_current_account)):
    return get_profile(account)


@router.post("/change-password")
def change_password_route(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    account=Depends(get_current_account),
):
    return change_password(db, account.account_id, payload.current_password, payload.new_password)
