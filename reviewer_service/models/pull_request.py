"""Pull request and reviewer assignment models."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum

from .base import Base


class PullRequestStatus(str, enum.Enum):
    """Pull request lifecycle status. OPEN -> MERGED is one-way."""

    OPEN = "OPEN"
    MERGED = "MERGED"


class PullRequest(Base):
    """A pull request with up to two assigned reviewers."""

    __tablename__ = "pull_requests"

    pull_request_id = Column(String(255), primary_key=True)
    pull_request_name = Column(String(500), nullable=False)
    author_id = Column(String(255), ForeignKey("users.user_id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=PullRequestStatus.OPEN.value)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    merged_at = Column(DateTime, nullable=True)
    # Bumped on every update; conditional updates compare against it
    version = Column(Integer, nullable=False, default=1)

    reviewers = relationship(
        "PullRequestReviewer",
        back_populates="pull_request",
        order_by="PullRequestReviewer.slot",
        cascade="all, delete-orphan",
    )

    @property
    def assigned_reviewers(self):
        return [reviewer.user_id for reviewer in self.reviewers]

    def __repr__(self):
        return f"<PullRequest(id={self.pull_request_id}, status={self.status})>"


class PullRequestReviewer(Base):
    """One reviewer slot of a pull request."""

    __tablename__ = "pull_request_reviewers"

    pull_request_id = Column(
        String(255),
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        primary_key=True,
    )
    slot = Column(Integer, primary_key=True)
    user_id = Column(String(255), ForeignKey("users.user_id"), nullable=False)

    pull_request = relationship("PullRequest", back_populates="reviewers")

    __table_args__ = (
        Index("ix_pull_request_reviewers_user_id", "user_id"),
    )
