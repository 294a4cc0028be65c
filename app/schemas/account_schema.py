from pydantic import BaseModel, EmailStr, ConfigDict
from app.models.enums import AccountRole
from app.schemas.permission_schema import Permissions


class AccountBase(BaseModel):
    email: EmailStr
    role: AccountRole
    is_active: bool = True


class AccountCreate(AccountBase):
    password: str
    can_read: bool = True
    can_write: bool = False
    can_delete: bool = False


class AccountRead(AccountBase):
    account_id: int

    model_config = ConfigDict(from_attributes=True)


class AccountProfile(AccountRead):
    permissions: Permissions


class AccountLogin(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
