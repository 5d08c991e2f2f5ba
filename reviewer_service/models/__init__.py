"""Models package for the PR reviewer service."""

# Import base first
from .base import Base

# Import all model classes for easy access
from .team import Team
from .user import User
from .pull_request import PullRequest, PullRequestReviewer, PullRequestStatus

__all__ = [
    "Base",
    "Team",
    "User",
    "PullRequest",
    "PullRequestReviewer",
    "PullRequestStatus",
]
