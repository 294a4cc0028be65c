from pydantic import BaseModel, ConfigDict
from typing import Optional
from app.schemas.announcement_schema import AnnouncementResponse


class UtilityLink(BaseModel):
    id: str
    name: str
    url: str

    model_config = ConfigDict(from_attributes=True)


class ProgramVideo(BaseModel):
    announcement_id: str
    title: str
    content: str
    video_id: Optional[str] = None
    embed_url: Optional[str] = None


class LandingPageResponse(BaseModel):
    announcements: list[AnnouncementResponse]
    videos: list[ProgramVideo]
    utility: Optional[UtilityLink] = None
