"""Store interfaces consumed by the review service.

One narrow protocol per entity. The SQLAlchemy stores in
``reviewer_service.repositories`` implement them; tests may pass fakes.
"""

from typing import List, Protocol

from reviewer_service.models.dtos import PullRequestDTO, TeamDTO, UserDTO


class TeamStore(Protocol):
    def create(self, team: TeamDTO) -> TeamDTO:
        """Persist a team and its members. Raises TeamExistsError."""
        ...

    def get(self, team_name: str) -> TeamDTO:
        """Raises TeamNotFoundError."""
        ...


class UserStore(Protocol):
    def get_by_id(self, user_id: str) -> UserDTO:
        """Raises UserNotFoundError."""
        ...

    def set_active(self, user_id: str, is_active: bool) -> UserDTO:
        """Raises UserNotFoundError."""
        ...

    def get_active_team_members(self, team_name: str, exclude_id: str) -> List[UserDTO]:
        """Active members of a team except exclude_id, in team order."""
        ...


class PullRequestStore(Protocol):
    def create(self, pr: PullRequestDTO) -> PullRequestDTO:
        """Raises PullRequestExistsError."""
        ...

    def get_by_id(self, pull_request_id: str) -> PullRequestDTO:
        """Raises PullRequestNotFoundError."""
        ...

    def exists(self, pull_request_id: str) -> bool:
        ...

    def update(self, pr: PullRequestDTO) -> PullRequestDTO:
        """Conditional on pr.version. Raises ConcurrentUpdateError."""
        ...

    def get_by_reviewer(self, user_id: str) -> List[PullRequestDTO]:
        ...
