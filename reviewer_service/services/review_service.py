"""Pull request lifecycle and team administration.

ReviewService enforces the pull request state machine (OPEN -> MERGED, no way
back) and drives reviewer assignment against the injected stores. It holds no
entity state between calls; every operation re-reads what it needs.
"""

import logging
from datetime import datetime
from typing import Callable, List, Tuple

from reviewer_service.models.dtos import PullRequestDTO, TeamDTO, UserDTO
from reviewer_service.models.pull_request import PullRequestStatus
from reviewer_service.services.errors import (
    AuthorNotFoundError,
    NoReviewersAvailableError,
    PRMergedError,
    PullRequestExistsError,
    ReviewerNotAssignedError,
    UserNotFoundError,
)
from reviewer_service.services.ports import PullRequestStore, TeamStore, UserStore
from reviewer_service.services.reviewer_assignment import (
    select_initial_reviewers,
    select_replacement,
)
from reviewer_service.utils.timezone import utc_now

logger = logging.getLogger(__name__)


class ReviewService:
    """Coordinates teams, users and pull request reviews."""

    def __init__(
        self,
        team_store: TeamStore,
        user_store: UserStore,
        pr_store: PullRequestStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the review service.

        Args:
            team_store: Team persistence
            user_store: User persistence
            pr_store: Pull request persistence
            clock: Source of "now" for created/merged timestamps
        """
        self.team_store = team_store
        self.user_store = user_store
        self.pr_store = pr_store
        self.clock = clock

    # ------------------------------------------------------------------
    # Team / user administration
    # ------------------------------------------------------------------

    def add_team(self, team: TeamDTO) -> TeamDTO:
        created = self.team_store.create(team)
        logger.info(f"Created team {created.team_name} with {len(created.members)} members")
        return created

    def get_team(self, team_name: str) -> TeamDTO:
        return self.team_store.get(team_name)

    def set_user_active(self, user_id: str, is_active: bool) -> UserDTO:
        user = self.user_store.set_active(user_id, is_active)
        logger.info(f"User {user_id} is_active set to {is_active}")
        return user

    # ------------------------------------------------------------------
    # Pull request lifecycle
    # ------------------------------------------------------------------

    def create_pull_request(self, pull_request_id: str, name: str, author_id: str) -> PullRequestDTO:
        """Create an OPEN pull request and assign up to two reviewers.

        Reviewers are the first active members of the author's team, in team
        order, excluding the author.

        Raises:
            PullRequestExistsError: the id is already taken
            AuthorNotFoundError: author_id is not a known user
        """
        if self.pr_store.exists(pull_request_id):
            raise PullRequestExistsError(pull_request_id)

        try:
            author = self.user_store.get_by_id(author_id)
        except UserNotFoundError:
            raise AuthorNotFoundError(author_id)

        team_members = self.user_store.get_active_team_members(author.team_name, author_id)
        reviewers = select_initial_reviewers(team_members, author_id)

        pr = PullRequestDTO(
            pull_request_id=pull_request_id,
            pull_request_name=name,
            author_id=author_id,
            status=PullRequestStatus.OPEN,
            assigned_reviewers=reviewers,
            created_at=self.clock(),
            merged_at=None,
        )
        created = self.pr_store.create(pr)

        logger.info(
            f"Created pull request {pull_request_id} by {author_id} "
            f"with reviewers {created.assigned_reviewers}"
        )
        return created

    def merge_pull_request(self, pull_request_id: str) -> PullRequestDTO:
        """Mark a pull request MERGED.

        Merging an already merged pull request returns it unchanged; the
        first merged_at is kept.

        Raises:
            PullRequestNotFoundError: unknown pull request
        """
        pr = self.pr_store.get_by_id(pull_request_id)

        if pr.is_merged:
            logger.debug(f"Pull request {pull_request_id} already merged, nothing to do")
            return pr

        pr.status = PullRequestStatus.MERGED
        pr.merged_at = self.clock()
        merged = self.pr_store.update(pr)

        logger.info(f"Merged pull request {pull_request_id}")
        return merged

    def reassign_reviewer(self, pull_request_id: str, old_reviewer_id: str) -> Tuple[PullRequestDTO, str]:
        """Replace one reviewer with another active member of their team.

        The replacement takes the old reviewer's slot; other reviewers keep
        their positions.

        Returns:
            The updated pull request and the new reviewer's id

        Raises:
            PullRequestNotFoundError: unknown pull request
            PRMergedError: the pull request is already merged
            ReviewerNotAssignedError: old_reviewer_id is not a current reviewer
            UserNotFoundError: old_reviewer_id is not a known user
            NoReviewersAvailableError: nobody outside author + current reviewers is active
        """
        pr = self.pr_store.get_by_id(pull_request_id)

        if pr.is_merged:
            raise PRMergedError(pull_request_id)

        if old_reviewer_id not in pr.assigned_reviewers:
            raise ReviewerNotAssignedError(pull_request_id, old_reviewer_id)

        old_reviewer = self.user_store.get_by_id(old_reviewer_id)

        team_members = self.user_store.get_active_team_members(old_reviewer.team_name, pr.author_id)
        new_reviewer_id = select_replacement(
            team_members, [pr.author_id, *pr.assigned_reviewers]
        )
        if new_reviewer_id is None:
            raise NoReviewersAvailableError(old_reviewer.team_name)

        pr.assigned_reviewers = [
            new_reviewer_id if reviewer_id == old_reviewer_id else reviewer_id
            for reviewer_id in pr.assigned_reviewers
        ]
        updated = self.pr_store.update(pr)

        logger.info(
            f"Reassigned reviewer on pull request {pull_request_id}: "
            f"{old_reviewer_id} -> {new_reviewer_id}"
        )
        return updated, new_reviewer_id

    def get_user_reviews(self, user_id: str) -> List[PullRequestDTO]:
        """All pull requests, any status, where user_id is a reviewer.

        Raises:
            UserNotFoundError: unknown user
        """
        self.user_store.get_by_id(user_id)
        return self.pr_store.get_by_reviewer(user_id)
