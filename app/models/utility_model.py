import uuid
from sqlalchemy import Column, String, Text, TIMESTAMP, Boolean
from sqlalchemy.sql import func
from app.models.base import Base


class Utility(Base):
    __tablename__ = "utilities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
