import logging
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import Dict
from app.core.realtime import ChangeChannel, ChangeEvent
from app.models.enums import ChangeEventType
from app.schemas.announcement_schema import (
    AnnouncementCreate,
    AnnouncementUpdate,
    AnnouncementResponse,
    AnnouncementListResponse
)
from app.repositories import announcement_repo

logger = logging.getLogger(__name__)

ANNOUNCEMENTS_TABLE = announcement_repo.ANNOUNCEMENTS_TABLE


def _publish(channel: ChangeChannel, event_type: ChangeEventType, announcement_id: str) -> None:
    channel.publish(ChangeEvent(table=ANNOUNCEMENTS_TABLE, event_type=event_type, record_id=announcement_id))


def _get_or_404(db: Session, announcement_id: str):
    announcement = announcement_repo.get_announcement(db, announcement_id)
    if not announcement:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found"
        )
    return announcement


def create_announcement(db: Session, data: AnnouncementCreate, channel: ChangeChannel) -> AnnouncementResponse:
    """Create a new announcement"""
    announcement = announcement_repo.create_announcement(db=db, data=data)
    logger.info("Announcement %s created", announcement.id)
    _publish(channel, ChangeEventType.INSERT, announcement.id)
    return AnnouncementResponse.model_validate(announcement)


def get_announcement(db: Session, announcement_id: str) -> AnnouncementResponse:
    return AnnouncementResponse.model_validate(_get_or_404(db, announcement_id))


def get_announcements(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    admin_view: bool = False
) -> AnnouncementListResponse:
    """Get list of announcements"""
    if admin_view:
        # Admin sees all announcements
        announcements = announcement_repo.get_all_announcements(db, skip=skip, limit=limit)
        total = announcement_repo.count_announcements(db, only_active=False)
    else:
        announcements = announcement_repo.get_active_announcements(db, skip=skip, limit=limit)
        total = announcement_repo.count_announcements(db, only_active=True)

    return AnnouncementListResponse(
        items=[AnnouncementResponse.model_validate(a) for a in announcements],
        total=total
    )


def update_announcement(
    db: Session,
    announcement_id: str,
    data: AnnouncementUpdate,
    channel: ChangeChannel
) -> AnnouncementResponse:
    announcement = _get_or_404(db, announcement_id)
    updated = announcement_repo.update_announcement(db, announcement, data)
    logger.info("Announcement %s updated", announcement_id)
    _publish(channel, ChangeEventType.UPDATE, announcement_id)
    return AnnouncementResponse.model_validate(updated)


def delete_announcement(db: Session, announcement_id: str, channel: ChangeChannel) -> Dict[str, str]:
    announcement = _get_or_404(db, announcement_id)
    announcement_repo.delete_announcement(db, announcement)
    logger.info("Announcement %s deleted", announcement_id)
    _publish(channel, ChangeEventType.DELETE, announcement_id)
    return {"status": "ok", "message": "Announcement deleted successfully"}
