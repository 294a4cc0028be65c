from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.config import get_settings
from app.core.query_cache import QueryCache, get_query_cache
from app.controllers.landing_controller import get_landing_page
from app.schemas.landing_schema import LandingPageResponse

router = APIRouter(prefix="/landing", tags=["landing"])


@router.get("", response_model=LandingPageResponse)
def landing_route(db: Session = Depends(get_db), cache: QueryCache = Depends(get_query_cache)):
    return get_landing_page(db, cache, limit=get_settings().landing_announcement_limit)
