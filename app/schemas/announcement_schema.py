from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional


class AnnouncementBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    youtube_video_url: Optional[str] = None
    is_active: bool = True
    expiry_date: Optional[datetime] = None


class AnnouncementCreate(AnnouncementBase):
    pass


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    youtube_video_url: Optional[str] = None
    is_active: Optional[bool] = None
    expiry_date: Optional[datetime] = None


class AnnouncementResponse(AnnouncementBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnnouncementListResponse(BaseModel):
    items: list[AnnouncementResponse]
    total: int
