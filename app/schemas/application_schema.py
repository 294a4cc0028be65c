from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from app.models.enums import ApplicationStatus, ApplicationDecision, ApplicationAction, BadgeVariant
from app.schemas.permission_schema import Permissions


class CategoryRef(BaseModel):
    name: str

    model_config = ConfigDict(from_attributes=True)


class PanchayathRef(BaseModel):
    name: str
    district: str

    model_config = ConfigDict(from_attributes=True)


class ApplicationRead(BaseModel):
    id: str
    customer_id: str
    name: str
    mobile_number: str
    address: str
    ward: str
    agent_pro: Optional[str] = None
    preference: Optional[str] = None
    status: ApplicationStatus
    fee_paid: float
    created_at: datetime
    updated_at: Optional[datetime] = None
    approved_date: Optional[datetime] = None
    approved_by: Optional[str] = None
    category_id: str
    panchayath_id: Optional[str] = None
    category: Optional[CategoryRef] = None
    panchayath: Optional[PanchayathRef] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ApplicationEdit(BaseModel):
    """Editable fields of an application; anything else in the payload is ignored."""

    name: Optional[str] = None
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    ward: Optional[str] = None
    agent_pro: Optional[str] = None
    preference: Optional[str] = None
    fee_paid: Optional[float] = None

    @field_validator("name", "mobile_number", "address", "ward", "fee_paid", mode="before")
    @classmethod
    def reject_null(cls, value):
        # omitted means unchanged; these columns cannot be cleared
        if value is None:
            raise ValueError("field cannot be null")
        return value


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationDecision


class ApplicationRow(BaseModel):
    application: ApplicationRead
    badge: BadgeVariant
    actions: list[ApplicationAction]


class ApplicationListResponse(BaseModel):
    items: list[ApplicationRow]
    visible: int
    total: int
    permissions: Permissions
