from sqlalchemy.orm import Session, joinedload
from sqlalchemy import select, update, delete
from app.models.application_model import Application
from app.models.enums import ApplicationStatus


def list_applications_with_lookups(db: Session) -> list[Application]:
    stmt = (
        select(Application)
        .options(joinedload(Application.category), joinedload(Application.panchayath))
        .order_by(Application.created_at.desc())
    )
    return list(db.execute(stmt).unique().scalars().all())


def get_application_by_id(db: Session, application_id: str) -> Application | None:
    stmt = (
        select(Application)
        .options(joinedload(Application.category), joinedload(Application.panchayath))
        .where(Application.id == application_id)
    )
    return db.execute(stmt).unique().scalars().first()


def update_application(db: Session, application_id: str, values: dict) -> int:
    """Partial update keyed by id. Returns the number of rows changed."""
    stmt = update(Application).where(Application.id == application_id).values(**values)
    result = db.execute(stmt)
    db.commit()
    return result.rowcount


def delete_application(db: Session, application_id: str) -> int:
    stmt = delete(Application).where(Application.id == application_id)
    result = db.execute(stmt)
    db.commit()
    return result.rowcount


def decide_pending_application(db: Session, application_id: str, values: dict) -> int:
    """Update a row only while it is still pending. Returns the number of rows changed."""
    stmt = (
        update(Application)
        .where(Application.id == application_id, Application.status == ApplicationStatus.PENDING)
        .values(**values)
    )
    result = db.execute(stmt)
    db.commit()
    return result.rowcount
