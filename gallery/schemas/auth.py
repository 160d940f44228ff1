from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """The signed-in user as seen by route handlers."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    x_profile: Optional[str] = None
    is_admin: bool = False


class LoginRequest(BaseModel):
    # Optional so a blank name yields "Name is required" rather than a schema error.
    name: Optional[str] = None
    x_profile: Optional[str] = Field(default=None, alias="xProfile")
    email: Optional[str] = None

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {"name": "Ada", "xProfile": "https://x.com/ada"}
        },
    }


class AdminLoginRequest(BaseModel):
    email: str = ""
    password: str = ""
