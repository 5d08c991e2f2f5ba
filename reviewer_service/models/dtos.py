"""Data Transfer Objects (DTOs) for database models.

These DTOs solve the "detached object" problem by copying data from SQLAlchemy
objects while the session is still active. They are plain Python objects that
can be safely used after the session is closed, and they are what the service
layer and the stores exchange.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from reviewer_service.models.pull_request import PullRequestStatus
from reviewer_service.utils.timezone import ensure_utc, format_rfc3339


@dataclass
class UserDTO:
    """DTO for User model."""
    user_id: str
    username: str
    team_name: str
    is_active: bool = True

    @classmethod
    def from_orm(cls, user):
        """Create DTO from SQLAlchemy User object.

        Must be called while the session is still active!
        """
        if user is None:
            return None

        return cls(
            user_id=user.user_id,
            username=user.username,
            team_name=user.team_name,
            is_active=bool(user.is_active),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'user_id': self.user_id,
            'username': self.username,
            'team_name': self.team_name,
            'is_active': self.is_active,
        }

    def to_member_dict(self) -> Dict[str, Any]:
        """Member form used inside a team payload (no team_name)."""
        return {
            'user_id': self.user_id,
            'username': self.username,
            'is_active': self.is_active,
        }


@dataclass
class TeamDTO:
    """DTO for Team model. Members keep their stored order."""
    team_name: str
    members: List[UserDTO] = field(default_factory=list)

    @classmethod
    def from_orm(cls, team):
        """Create DTO from SQLAlchemy Team object.

        Must be called while the session is still active!
        """
        if team is None:
            return None

        return cls(
            team_name=team.team_name,
            members=[UserDTO.from_orm(member) for member in team.members],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'team_name': self.team_name,
            'members': [member.to_member_dict() for member in self.members],
        }


@dataclass
class PullRequestDTO:
    """DTO for PullRequest model."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus = PullRequestStatus.OPEN
    assigned_reviewers: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None
    version: int = 1

    @property
    def is_merged(self) -> bool:
        return self.status == PullRequestStatus.MERGED

    @classmethod
    def from_orm(cls, pr):
        """Create DTO from SQLAlchemy PullRequest object.

        Must be called while the session is still active!
        """
        if pr is None:
            return None

        return cls(
            pull_request_id=pr.pull_request_id,
            pull_request_name=pr.pull_request_name,
            author_id=pr.author_id,
            status=PullRequestStatus(pr.status),
            assigned_reviewers=list(pr.assigned_reviewers),
            created_at=ensure_utc(pr.created_at),
            merged_at=ensure_utc(pr.merged_at),
            version=pr.version,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Timestamp keys are omitted while unset.
        """
        data = {
            'pull_request_id': self.pull_request_id,
            'pull_request_name': self.pull_request_name,
            'author_id': self.author_id,
            'status': self.status.value,
            'assigned_reviewers': list(self.assigned_reviewers),
        }
        if self.created_at is not None:
            data['createdAt'] = format_rfc3339(self.created_at)
        if self.merged_at is not None:
            data['mergedAt'] = format_rfc3339(self.merged_at)
        return data

    def to_short_dict(self) -> Dict[str, Any]:
        """Short form used in a user's review list."""
        return {
            'pull_request_id': self.pull_request_id,
            'pull_request_name': self.pull_request_name,
            'author_id': self.author_id,
            'status': self.status.value,
        }
