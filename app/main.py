from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.log_config import configure_logging
from app.core.query_cache import get_query_cache
from app.core.realtime import get_change_channel
from app.controllers.landing_controller import subscribe_landing_invalidation
from app.routes.health import router as health_router
from app.routes.auth import router as auth_router
from app.routes.applications import router as applications_router
from app.routes.announcements import router as announcements_router
from app.routes.landing import router as landing_router

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Self Employment Registration Portal")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_base_url,
        "http://localhost:8080",
        "http://127.0.0.1:8080",
    ],
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(landing_router)
app.include_router(announcements_router)
app.include_router(applications_router)

subscribe_landing_invalidation(get_change_channel(), get_query_cache())
