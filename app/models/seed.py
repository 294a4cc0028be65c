from __future__ import annotations

import logging
import os

from sqlalchemy.orm import Session

from app.core.db import SessionLocal, create_tables
from app.core.security import hash_password
from app.models.account_model import Account
from app.repositories.account_repo import create_account
from app.schemas.account_schema import AccountCreate
from app.models.category_model import Category
from app.models.enums import AccountRole
from app.models.panchayath_model import Panchayath

logger = logging.getLogger(__name__)

SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
SEED_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "Test12345")

SEED_CATEGORIES = [
    "Pennyekart Free Registration",
    "Pennyekart Paid Registration",
    "Farmelife",
    "Organelife",
    "Foodelife",
    "Entrelife",
    "Job Card",
]

SEED_PANCHAYATHS = [
    {"name": "Kondotty", "district": "Malappuram"},
    {"name": "Vazhakkad", "district": "Malappuram"},
    {"name": "Kunnamangalam", "district": "Kozhikode"},
    {"name": "Olavanna", "district": "Kozhikode"},
]


def seed_lookups(db: Session) -> tuple[list[Category], list[Panchayath]]:
    categories: list[Category] = []
    for name in SEED_CATEGORIES:
        if db.query(Category).filter(Category.name == name).first():
            continue
        category = Category(name=name)
        db.add(category)
        categories.append(category)

    panchayaths: list[Panchayath] = []
    for item in SEED_PANCHAYATHS:
        existing = (
            db.query(Panchayath)
            .filter(Panchayath.name == item["name"], Panchayath.district == item["district"])
            .first()
        )
        if existing:
            continue
        panchayath = Panchayath(name=item["name"], district=item["district"])
        db.add(panchayath)
        panchayaths.append(panchayath)

    db.commit()
    return categories, panchayaths


def seed_admin(db: Session) -> Account | None:
    if db.query(Account).filter(Account.email == SEED_ADMIN_EMAIL).first():
        return None
    payload = AccountCreate(
        email=SEED_ADMIN_EMAIL,
        password=SEED_PASSWORD,
        role=AccountRole.ADMIN,
        can_read=True,
        can_write=True,
        can_delete=True,
        is_active=True,
    )
    return create_account(db, payload, hash_password(payload.password))


def run_seed() -> None:
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    create_tables()
    db = SessionLocal()
    try:
        categories, panchayaths = seed_lookups(db)
        admin = seed_admin(db)
        logger.info(
            "Seeded %d categories, %d panchayaths, admin=%s",
            len(categories),
            len(panchayaths),
            admin.email if admin else "existing",
        )
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_seed()
