from pydantic import BaseModel, ConfigDict


class Permissions(BaseModel):
    can_read: bool = False
    can_write: bool = False
    can_delete: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def full(cls) -> "Permissions":
        return cls(can_read=True, can_write=True, can_delete=True)
