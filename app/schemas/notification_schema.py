from pydantic import BaseModel
from typing import Literal


class Notification(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class ActionResponse(BaseModel):
    status: Literal["ok", "cancelled"]
    notification: Notification | None = None
