"""SQLAlchemy-backed pull request store."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from reviewer_service.models import PullRequest, PullRequestReviewer
from reviewer_service.models.dtos import PullRequestDTO
from reviewer_service.services.errors import (
    ConcurrentUpdateError,
    PullRequestExistsError,
    PullRequestNotFoundError,
)
from reviewer_service.utils.database import Database

logger = logging.getLogger(__name__)


def _reviewer_rows(pull_request_id: str, reviewer_ids: List[str]) -> List[PullRequestReviewer]:
    return [
        PullRequestReviewer(pull_request_id=pull_request_id, slot=slot, user_id=user_id)
        for slot, user_id in enumerate(reviewer_ids)
    ]


class SqlPullRequestStore:
    """Persists pull requests and their ordered reviewer slots.

    Updates are conditional on the version that was read, so two writers
    racing on the same pull request cannot both succeed.
    """

    def __init__(self, database: Database):
        self.database = database

    def create(self, pr: PullRequestDTO) -> PullRequestDTO:
        try:
            with self.database.session_scope() as session:
                row = PullRequest(
                    pull_request_id=pr.pull_request_id,
                    pull_request_name=pr.pull_request_name,
                    author_id=pr.author_id,
                    status=pr.status.value,
                    created_at=pr.created_at,
                    merged_at=pr.merged_at,
                    version=1,
                )
                row.reviewers = _reviewer_rows(pr.pull_request_id, pr.assigned_reviewers)
                session.add(row)
                session.flush()
                return PullRequestDTO.from_orm(row)
        except IntegrityError:
            # Primary key clash with a concurrent create
            if self.exists(pr.pull_request_id):
                raise PullRequestExistsError(pr.pull_request_id)
            raise

    def get_by_id(self, pull_request_id: str) -> PullRequestDTO:
        with self.database.session_scope() as session:
            row = session.get(PullRequest, pull_request_id)
            if row is None:
                raise PullRequestNotFoundError(pull_request_id)
            return PullRequestDTO.from_orm(row)

    def exists(self, pull_request_id: str) -> bool:
        with self.database.session_scope() as session:
            return (
                session.query(PullRequest.pull_request_id)
                .filter_by(pull_request_id=pull_request_id)
                .first()
                is not None
            )

    def update(self, pr: PullRequestDTO) -> PullRequestDTO:
        """Write pr back if nobody changed it since it was read.

        Raises:
            PullRequestNotFoundError: the row no longer exists
            ConcurrentUpdateError: the stored version differs from pr.version
        """
        with self.database.session_scope() as session:
            updated = (
                session.query(PullRequest)
                .filter(
                    PullRequest.pull_request_id == pr.pull_request_id,
                    PullRequest.version == pr.version,
                )
                .update(
                    {
                        PullRequest.pull_request_name: pr.pull_request_name,
                        PullRequest.author_id: pr.author_id,
                        PullRequest.status: pr.status.value,
                        PullRequest.created_at: pr.created_at,
                        PullRequest.merged_at: pr.merged_at,
                        PullRequest.version: pr.version + 1,
                    },
                    synchronize_session=False,
                )
            )

            if updated == 0:
                if session.get(PullRequest, pr.pull_request_id) is None:
                    raise PullRequestNotFoundError(pr.pull_request_id)
                logger.warning(
                    f"Stale update rejected for pull request {pr.pull_request_id} "
                    f"(read version {pr.version})"
                )
                raise ConcurrentUpdateError(pr.pull_request_id, pr.version)

            session.query(PullRequestReviewer).filter_by(
                pull_request_id=pr.pull_request_id
            ).delete(synchronize_session=False)
            session.add_all(_reviewer_rows(pr.pull_request_id, pr.assigned_reviewers))
            session.flush()

            row = (
                session.query(PullRequest)
                .filter_by(pull_request_id=pr.pull_request_id)
                .populate_existing()
                .one()
            )
            return PullRequestDTO.from_orm(row)

    def get_by_reviewer(self, user_id: str) -> List[PullRequestDTO]:
        """Pull requests of any status with user_id in a reviewer slot, oldest first."""
        with self.database.session_scope() as session:
            rows = (
                session.query(PullRequest)
                .join(PullRequestReviewer)
                .filter(PullRequestReviewer.user_id == user_id)
                .order_by(PullRequest.created_at, PullRequest.pull_request_id)
                .all()
            )
            return [PullRequestDTO.from_orm(row) for row in rows]
