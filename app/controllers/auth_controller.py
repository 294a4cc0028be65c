import logging
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.schemas.account_schema import AccountLogin, TokenResponse, AccountProfile, AccountRead
from app.repositories.account_repo import get_account_by_email, get_account_by_id
from app.core.auth import permissions_for_account
from app.core.security import verify_password, create_access_token, hash_password

logger = logging.getLogger(__name__)


def login(db: Session, data: AccountLogin) -> TokenResponse:
    account = get_account_by_email(db, data.email)
    if not account or not verify_password(data.password, account.password_hash):
        logger.warning("Failed login for %s", data.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not account.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive account")
    token = create_access_token(subject=str(account.account_id), extra_claims={"role": account.role.value})
    return TokenResponse(access_token=token)


def get_profile(account) -> AccountProfile:
    base = AccountRead.model_validate(account)
    return AccountProfile(**base.model_dump(), permissions=permissions_for_account(account))


def change_password(db: Session, account_id: int, current_password: str, new_password: str):
    account = get_account_by_id(db, account_id)
    if not account or not verify_password(current_password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
    account.password_hash = hash_password(new_password)
    db.commit()
    db.refresh(account)
    return {"status": "ok"}
