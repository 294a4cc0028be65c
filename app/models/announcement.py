import uuid
from sqlalchemy import Column, String, Text, TIMESTAMP, Boolean, CheckConstraint
from sqlalchemy.sql import func
from app.models.base import Base


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    youtube_video_url = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")
    expiry_date = Column(TIMESTAMP(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="chk_announcement_title_not_blank"),
        CheckConstraint("length(trim(content)) > 0", name="chk_announcement_content_not_blank"),
    )
