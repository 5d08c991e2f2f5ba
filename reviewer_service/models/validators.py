"""Pydantic validation models for API requests."""

from pydantic import BaseModel, Field, StrictBool, field_validator
from typing import List


class TeamMemberRequest(BaseModel):
    """A single member inside a team creation request."""

    user_id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)
    # StrictBool so a missing or non-boolean value is rejected instead of
    # silently coerced to False
    is_active: StrictBool


class AddTeamRequest(BaseModel):
    """Validation for team creation."""

    team_name: str = Field(..., min_length=1, max_length=255)
    members: List[TeamMemberRequest]

    @field_validator("members")
    @classmethod
    def validate_unique_members(cls, v: List[TeamMemberRequest]) -> List[TeamMemberRequest]:
        """Reject requests listing the same user twice."""
        seen = set()
        for member in v:
            if member.user_id in seen:
                raise ValueError(f"Duplicate user_id in members: {member.user_id}")
            seen.add(member.user_id)
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "team_name": "backend",
                "members": [
                    {"user_id": "u1", "username": "Alice", "is_active": True},
                    {"user_id": "u2", "username": "Bob", "is_active": True},
                ],
            }
        }
    }


class SetUserActiveRequest(BaseModel):
    """Validation for toggling a user's review availability."""

    user_id: str = Field(..., min_length=1, max_length=255)
    is_active: StrictBool


class CreatePullRequestRequest(BaseModel):
    """Validation for pull request creation."""

    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(..., min_length=1, max_length=500)
    author_id: str = Field(..., min_length=1, max_length=255)


class MergePullRequestRequest(BaseModel):
    """Validation for pull request merge."""

    pull_request_id: str = Field(..., min_length=1, max_length=255)


class ReassignReviewerRequest(BaseModel):
    """Validation for reviewer reassignment."""

    pull_request_id: str = Field(..., min_length=1, max_length=255)
    old_user_id: str = Field(..., min_length=1, max_length=255)
