import enum
from enum import Enum as PyEnum


class AccountRole(enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"


class ApplicationStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApplicationDecision(str, PyEnum):
    APPROVED = "approved"
    REJECTED = "rejected"


class StatusFilter(str, PyEnum):
    ALL = "all"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BadgeVariant(str, PyEnum):
    DEFAULT = "default"
    SECONDARY = "secondary"
    DESTRUCTIVE = "destructive"


class ApplicationAction(str, PyEnum):
    EDIT = "edit"
    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"


class ChangeEventType(str, PyEnum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
