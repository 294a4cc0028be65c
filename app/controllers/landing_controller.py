"""
Public landing page data: active announcements, programme videos and the
current utility link.

Announcements are served from the query cache until the earliest expiry among
them passes; a change subscription invalidates the entry sooner. The utility
link is written outside this service and is read on every request.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence
from urllib.parse import parse_qs, urlparse

from sqlalchemy.orm import Session

from app.core.query_cache import QueryCache
from app.core.realtime import ChangeChannel, ChangeEvent, Subscription
from app.repositories import announcement_repo, utility_repo
from app.schemas.announcement_schema import AnnouncementResponse
from app.schemas.landing_schema import LandingPageResponse, ProgramVideo, UtilityLink

logger = logging.getLogger(__name__)

ANNOUNCEMENTS_QUERY_KEY = ("announcements",)
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"


def extract_youtube_video_id(url: Optional[str]) -> Optional[str]:
    """Video id from a ``youtube.com/watch?v=`` or ``youtu.be/`` link, else None."""
    if not url:
        return None
    parsed = urlparse(url if "//" in url else f"//{url}")
    host = (parsed.hostname or "").lower()
    if host.endswith("youtube.com") and parsed.path == "/watch":
        return parse_qs(parsed.query).get("v", [None])[0] or None
    if host == "youtu.be":
        return parsed.path.lstrip("/").split("/")[0] or None
    return None


def seconds_until_first_expiry(announcements: Sequence[AnnouncementResponse]) -> Optional[float]:
    """Cache lifetime for a set of active announcements: until the earliest one expires."""
    expiries = [
        a.expiry_date if a.expiry_date.tzinfo else a.expiry_date.replace(tzinfo=timezone.utc)
        for a in announcements
        if a.expiry_date is not None
    ]
    if not expiries:
        return None
    return max((min(expiries) - datetime.now(timezone.utc)).total_seconds(), 0.0)


def _program_video(announcement: AnnouncementResponse) -> ProgramVideo:
    video_id = extract_youtube_video_id(announcement.youtube_video_url)
    return ProgramVideo(
        announcement_id=announcement.id,
        title=announcement.title,
        content=announcement.content,
        video_id=video_id,
        embed_url=YOUTUBE_EMBED_URL.format(video_id=video_id) if video_id else None,
    )


def get_landing_page(db: Session, cache: QueryCache, limit: int = 10) -> LandingPageResponse:
    announcements = cache.fetch(
        ANNOUNCEMENTS_QUERY_KEY,
        lambda: tuple(
            AnnouncementResponse.model_validate(a)
            for a in announcement_repo.get_active_announcements(db, limit=limit)
        ),
        ttl=seconds_until_first_expiry,
    )

    utility = utility_repo.get_latest_active_utility(db)

    return LandingPageResponse(
        announcements=list(announcements),
        videos=[_program_video(a) for a in announcements if a.youtube_video_url],
        utility=UtilityLink.model_validate(utility) if utility else None,
    )


def subscribe_landing_invalidation(channel: ChangeChannel, cache: QueryCache) -> Subscription:
    def _on_announcement_change(event: ChangeEvent) -> None:
        logger.info("Announcement %s changed (%s), refreshing landing data", event.record_id, event.event_type.value)
        cache.invalidate(ANNOUNCEMENTS_QUERY_KEY)

    return channel.subscribe(announcement_repo.ANNOUNCEMENTS_TABLE, _on_announcement_change)
