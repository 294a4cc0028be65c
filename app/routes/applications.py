from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import get_permissions, require_write, require_delete
from app.core.config import get_settings
from app.core.notifications import Notifier, get_notifier
from app.core.query_cache import QueryCache, get_query_cache
from app.core.realtime import ChangeChannel, get_change_channel
from app.controllers.applications_workbench import ApplicationsWorkbench
from app.models.enums import StatusFilter
from app.schemas.application_schema import (
    ApplicationEdit,
    ApplicationListResponse,
    ApplicationRead,
    ApplicationStatusUpdate,
)
from app.schemas.notification_schema import ActionResponse
from app.schemas.permission_schema import Permissions

router = APIRouter(prefix="/applications", tags=["applications"])


def get_workbench(
    db: Session = Depends(get_db),
    permissions: Permissions = Depends(get_permissions),
    cache: QueryCache = Depends(get_query_cache),
    notifier: Notifier = Depends(get_notifier),
    channel: ChangeChannel = Depends(get_change_channel),
) -> ApplicationsWorkbench:
    return ApplicationsWorkbench(
        db,
        permissions,
        cache,
        notifier,
        channel=channel,
        actor_label=get_settings().approval_actor_label,
    )


@router.get("", response_model=ApplicationListResponse)
def list_applications_route(
    search: str = Query(default=""),
    status: StatusFilter = Query(default=StatusFilter.ALL),
    workbench: ApplicationsWorkbench = Depends(get_workbench),
):
    return workbench.build_listing(search, status)


@router.get("/{application_id}", response_model=ApplicationRead)
def get_application_route(application_id: str, workbench: ApplicationsWorkbench = Depends(get_workbench)):
    return workbench.get_application(application_id, refresh=True)


@router.post("/{application_id}/status", response_model=ActionResponse)
def update_status_route(
    application_id: str,
    payload: ApplicationStatusUpdate,
    workbench: ApplicationsWorkbench = Depends(get_workbench),
    _permissions=Depends(require_write),
):
    notification = workbench.update_status(application_id, payload.status)
    return ActionResponse(status="ok", notification=notification)


@router.patch("/{application_id}", response_model=ActionResponse)
def edit_application_route(
    application_id: str,
    payload: ApplicationEdit,
    workbench: ApplicationsWorkbench = Depends(get_workbench),
    _permissions=Depends(require_write),
):
    form = workbench.start_edit(application_id)
    form.update(**payload.model_dump(exclude_unset=True))
    notification = workbench.submit_edit(form)
    return ActionResponse(status="ok", notification=notification)


@router.delete("/{application_id}", response_model=ActionResponse)
def delete_application_route(
    application_id: str,
    confirm: bool = Query(default=False),
    workbench: ApplicationsWorkbench = Depends(get_workbench),
    _permissions=Depends(require_delete),
):
    notification = workbench.delete_application(application_id, confirmed=confirm)
    if notification is None:
        return ActionResponse(status="cancelled")
    return ActionResponse(status="ok", notification=notification)
