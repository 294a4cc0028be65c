from sqlalchemy.orm import Session
from sqlalchemy import or_
from datetime import datetime, timezone
from typing import Optional, List
from app.models.announcement import Announcement
from app.schemas.announcement_schema import AnnouncementCreate, AnnouncementUpdate

ANNOUNCEMENTS_TABLE = Announcement.__tablename__


def _active_filter(query):
    now = datetime.now(timezone.utc)
    return query.filter(
        Announcement.is_active == True,  # noqa: E712
        or_(Announcement.expiry_date.is_(None), Announcement.expiry_date > now),
    )


def create_announcement(db: Session, data: AnnouncementCreate) -> Announcement:
    """Create a new announcement"""
    db_announcement = Announcement(**data.model_dump())
    db.add(db_announcement)
    db.commit()
    db.refresh(db_announcement)
    return db_announcement


def get_announcement(db: Session, announcement_id: str) -> Optional[Announcement]:
    return db.query(Announcement).filter(Announcement.id == announcement_id).first()


def get_active_announcements(db: Session, skip: int = 0, limit: int = 100) -> List[Announcement]:
    """Active announcements, newest first"""
    query = _active_filter(db.query(Announcement))
    return query.order_by(Announcement.created_at.desc()).offset(skip).limit(limit).all()


def get_all_announcements(db: Session, skip: int = 0, limit: int = 100) -> List[Announcement]:
    """Get all announcements for admin view"""
    return db.query(Announcement).order_by(Announcement.created_at.desc()).offset(skip).limit(limit).all()


def count_announcements(db: Session, only_active: bool = True) -> int:
    query = db.query(Announcement)
    if only_active:
        query = _active_filter(query)
    return query.count()


def update_announcement(db: Session, announcement: Announcement, data: AnnouncementUpdate) -> Announcement:
    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(announcement, field, value)

    db.commit()
    db.refresh(announcement)
    return announcement


def delete_announcement(db: Session, announcement: Announcement) -> None:
    db.delete(announcement)
    db.commit()
