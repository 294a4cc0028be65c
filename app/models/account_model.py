from sqlalchemy import Column, BigInteger, Integer, Text, TIMESTAMP, Boolean, Enum as SAEnum
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import AccountRole


class Account(Base):
    __tablename__ = "account_tbl"

    account_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    role = Column(SAEnum(AccountRole, name="account_role_enum"), nullable=False)
    can_read = Column(Boolean, nullable=False, default=True, server_default="true")
    can_write = Column(Boolean, nullable=False, default=False, server_default="false")
    can_delete = Column(Boolean, nullable=False, default=False, server_default="false")
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
