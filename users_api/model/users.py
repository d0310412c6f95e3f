from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(CamelModel):
    username: str
    first_name: str
    last_name: str
    status: UserStatus = UserStatus.ACTIVE
    logins_counter: int = Field(default=0, ge=0)
    creation_time: str
    last_update_time: str


class CreateUserRequest(CamelModel):
    username: str = Field(..., min_length=1, description="Unique username")
    first_name: str
    last_name: str


class UpdateUserDetailsRequest(CamelModel):
    first_name: str = None
    last_name: str = None


class UpdateUserStatusRequest(CamelModel):
    status: UserStatus


class UserUpdate(CamelModel):
    """Partial update applied by the repository; ``None`` fields are left untouched."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[UserStatus] = None
    logins_counter: Optional[int] = Field(default=None, ge=0)


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    users: int
