from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.utility_model import Utility


def get_latest_active_utility(db: Session) -> Utility | None:
    stmt = (
        select(Utility)
        .where(Utility.is_active.is_(True))
        .order_by(Utility.created_at.desc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()
