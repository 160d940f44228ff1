"""Pydantic schemas that describe project, heart and comment payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

ProjectStatus = Literal["pending", "approved", "rejected", "suspended"]


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    x_profile: Optional[str] = None


class ProjectFields(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None
    github_url: Optional[str] = None
    icon_url: Optional[str] = None


class ProjectCreate(ProjectFields):
    pass


class ProjectUpdate(ProjectFields):
    status: Optional[ProjectStatus] = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str
    website_url: Optional[str] = None
    github_url: Optional[str] = None
    icon_url: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    hearts_count: int = 0
    user: Optional[UserSummary] = None


class GuestHeartRequest(BaseModel):
    guest_id: Optional[str] = None


class CommentCreate(BaseModel):
    content: Optional[str] = None


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: str
    user_id: str
    content: str
    created_at: datetime
    user: Optional[UserSummary] = None
