"""SQLAlchemy models for gallery projects, their hearts and comments."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ..db.session import Base
from .common import new_id, utcnow

PROJECT_STATUSES = ("pending", "approved", "rejected", "suspended")


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    website_url = Column(Text, nullable=True)
    github_url = Column(Text, nullable=True)
    icon_url = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User")
    hearts = relationship("Heart", back_populates="project", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="project", cascade="all, delete-orphan")


class Heart(Base):
    """A like from either a signed-in user or an anonymous guest."""

    __tablename__ = "hearts"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_hearts_project_user"),
        UniqueConstraint("project_id", "guest_id", name="uq_hearts_project_guest"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    guest_id = Column(String(128), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    project = relationship("Project", back_populates="hearts")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    project = relationship("Project", back_populates="comments")
    user = relationship("User")


__all__ = ["Comment", "Heart", "PROJECT_STATUSES", "Project"]
