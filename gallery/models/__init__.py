# Importing the models registers their tables with ``Base.metadata``.
from .project import PROJECT_STATUSES, Comment, Heart, Project
from .user import User, UserSession

__all__ = ["Comment", "Heart", "PROJECT_STATUSES", "Project", "User", "UserSession"]
