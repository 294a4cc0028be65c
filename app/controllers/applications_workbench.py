"""
Back-office workbench for self-employment scheme applications.

The workbench reads the joined application list through the shared query
cache, filters it in memory, and issues the three mutations operators can
perform: a status decision, a field edit and a deletion. Every successful
mutation invalidates the cached list instead of patching it, so the next
read always comes from the database. Failed mutations leave the cache alone.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.notifications import Notifier
from app.core.query_cache import QueryCache
from app.core.realtime import ChangeChannel, ChangeEvent
from app.models.enums import (
    ApplicationAction,
    ApplicationDecision,
    ApplicationStatus,
    BadgeVariant,
    ChangeEventType,
    StatusFilter,
)
from app.repositories import application_repo
from app.schemas.application_schema import ApplicationListResponse, ApplicationRead, ApplicationRow
from app.schemas.notification_schema import Notification
from app.schemas.permission_schema import Permissions

logger = logging.getLogger(__name__)

APPLICATIONS_TABLE = "applications"
APPLICATIONS_QUERY_KEY = ("applications",)
READ_DENIED_MESSAGE = "You don't have permission to view applications."

EDITABLE_FIELDS = (
    "name",
    "mobile_number",
    "address",
    "ward",
    "agent_pro",
    "preference",
    "fee_paid",
)

_BADGE_VARIANTS = {
    ApplicationStatus.PENDING: BadgeVariant.SECONDARY,
    ApplicationStatus.APPROVED: BadgeVariant.DEFAULT,
    ApplicationStatus.REJECTED: BadgeVariant.DESTRUCTIVE,
}


def status_badge_variant(app_status) -> BadgeVariant:
    return _BADGE_VARIANTS.get(app_status, BadgeVariant.SECONDARY)


def filter_applications(
    applications: Iterable[ApplicationRead],
    search_term: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
) -> list[ApplicationRead]:
    """Return the applications matching the search term and status selector.

    The term is matched case-insensitively as a substring of the name, mobile
    number or customer id. The source iterable is never modified.
    """
    term = (search_term or "").lower()
    selected = StatusFilter(status_filter)

    def matches(app: ApplicationRead) -> bool:
        matches_search = (
            term in app.name.lower()
            or term in app.mobile_number.lower()
            or term in app.customer_id.lower()
        )
        matches_status = selected is StatusFilter.ALL or app.status == selected.value
        return matches_search and matches_status

    return [app for app in applications if matches(app)]


def _not_pending() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Only pending applications can be approved or rejected",
    )


class EditForm:
    """Buffer for the edit dialog, seeded from the selected application."""

    def __init__(self):
        self.is_open = False
        self.record: Optional[ApplicationRead] = None
        self.buffer: dict = {}

    def open(self, record: ApplicationRead) -> None:
        self.record = record
        self.buffer = record.model_dump()
        self.is_open = True

    def update(self, **changes) -> None:
        if not self.is_open:
            raise RuntimeError("Edit form is not open")
        self.buffer.update(changes)

    def payload(self) -> dict:
        return {field: self.buffer.get(field) for field in EDITABLE_FIELDS}

    def close(self) -> None:
        self.is_open = False
        self.record = None
        self.buffer = {}


class ApplicationsWorkbench:
    def __init__(
        self,
        db: Session,
        permissions: Permissions,
        cache: QueryCache,
        notifier: Notifier,
        channel: Optional[ChangeChannel] = None,
        actor_label: str = "admin",
    ):
        self.db = db
        self.permissions = permissions
        self.cache = cache
        self.notifier = notifier
        self.channel = channel
        self.actor_label = actor_label

    # Reads

    def _fetch_applications(self) -> tuple[ApplicationRead, ...]:
        rows = application_repo.list_applications_with_lookups(self.db)
        return tuple(ApplicationRead.model_validate(row) for row in rows)

    def list_applications(self, refresh: bool = False) -> tuple[ApplicationRead, ...]:
        """The joined application list; ``refresh`` re-reads it like a fresh mount."""
        if not self.permissions.can_read:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=READ_DENIED_MESSAGE)
        try:
            return self.cache.fetch(APPLICATIONS_QUERY_KEY, self._fetch_applications, refresh=refresh)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load applications")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to load applications",
            ) from exc

    def get_application(self, application_id: str, refresh: bool = False) -> ApplicationRead:
        for app in self.list_applications(refresh=refresh):
            if app.id == application_id:
                return app
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    def visible_applications(
        self, search_term: str = "", status_filter: StatusFilter | str = StatusFilter.ALL
    ) -> list[ApplicationRead]:
        return filter_applications(self.list_applications(), search_term, status_filter)

    def available_actions(self, app: ApplicationRead) -> list[ApplicationAction]:
        actions = []
        if self.permissions.can_write:
            actions.append(ApplicationAction.EDIT)
            if app.status == ApplicationStatus.PENDING:
                actions.extend([ApplicationAction.APPROVE, ApplicationAction.REJECT])
        if self.permissions.can_delete:
            actions.append(ApplicationAction.DELETE)
        return actions

    def build_listing(
        self,
        search_term: str = "",
        status_filter: StatusFilter | str = StatusFilter.ALL,
        refresh: bool = True,
    ) -> ApplicationListResponse:
        applications = self.list_applications(refresh=refresh)
        visible = filter_applications(applications, search_term, status_filter)
        return ApplicationListResponse(
            items=[
                ApplicationRow(
                    application=app,
                    badge=status_badge_variant(app.status),
                    actions=self.available_actions(app),
                )
                for app in visible
            ],
            visible=len(visible),
            total=len(applications),
            permissions=self.permissions,
        )

    # Mutations

    def _store_failure(self, description: str) -> HTTPException:
        self.db.rollback()
        self.notifier.error(description)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=description)

    def _after_mutation(self, event_type: ChangeEventType, application_id: str) -> None:
        self.cache.invalidate(APPLICATIONS_QUERY_KEY)
        if self.channel is not None:
            self.channel.publish(
                ChangeEvent(table=APPLICATIONS_TABLE, event_type=event_type, record_id=application_id)
            )

    def load_application(self, application_id: str) -> ApplicationRead:
        record = application_repo.get_application_by_id(self.db, application_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
        return ApplicationRead.model_validate(record)

    def update_status(self, application_id: str, decision: ApplicationDecision | str) -> Notification:
        decision = ApplicationDecision(decision)
        failure_message = "Failed to update application status"
        try:
            current = self.load_application(application_id)
        except SQLAlchemyError as exc:
            logger.exception("Could not load application %s", application_id)
            raise self._store_failure(failure_message) from exc

        if current.status != ApplicationStatus.PENDING:
            raise _not_pending()

        now = datetime.now(timezone.utc)
        approved = decision is ApplicationDecision.APPROVED
        values = {
            "status": ApplicationStatus(decision.value),
            "approved_date": now if approved else None,
            "approved_by": self.actor_label if approved else None,
            "updated_at": now,
        }
        try:
            changed = application_repo.decide_pending_application(self.db, application_id, values)
            if not changed:
                # decided by someone else since the check above, or removed
                exists = application_repo.get_application_by_id(self.db, application_id) is not None
        except SQLAlchemyError as exc:
            logger.exception("Status update failed for application %s", application_id)
            raise self._store_failure(failure_message) from exc
        if not changed:
            if exists:
                raise _not_pending()
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        logger.info("Application %s marked %s", application_id, decision.value)
        self._after_mutation(ChangeEventType.UPDATE, application_id)
        return self.notifier.success("Application status updated successfully")

    def open_edit(self, record: ApplicationRead) -> EditForm:
        form = EditForm()
        form.open(record)
        return form

    def start_edit(self, application_id: str) -> EditForm:
        """Open an edit form seeded from the stored application."""
        try:
            record = self.load_application(application_id)
        except SQLAlchemyError as exc:
            logger.exception("Could not load application %s for editing", application_id)
            raise self._store_failure("Failed to update application") from exc
        return self.open_edit(record)

    def submit_edit(self, form: EditForm) -> Notification:
        if not form.is_open or form.record is None:
            raise ValueError("No application is being edited")

        application_id = form.record.id
        values = form.payload()
        values["updated_at"] = datetime.now(timezone.utc)
        try:
            changed = application_repo.update_application(self.db, application_id, values)
        except SQLAlchemyError as exc:
            logger.exception("Edit failed for application %s", application_id)
            raise self._store_failure("Failed to update application") from exc
        if not changed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        form.close()
        logger.info("Application %s edited", application_id)
        self._after_mutation(ChangeEventType.UPDATE, application_id)
        return self.notifier.success("Application updated successfully")

    def delete_application(self, application_id: str, confirmed: bool) -> Optional[Notification]:
        if not confirmed:
            logger.info("Deletion of application %s cancelled", application_id)
            return None

        try:
            removed = application_repo.delete_application(self.db, application_id)
        except SQLAlchemyError as exc:
            logger.exception("Delete failed for application %s", application_id)
            raise self._store_failure("Failed to delete application") from exc
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

        logger.info("Application %s deleted", application_id)
        self._after_mutation(ChangeEventType.DELETE, application_id)
        return self.notifier.success("Application deleted successfully")
