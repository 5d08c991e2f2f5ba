"""User model."""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class User(Base):
    """A team member who can author pull requests and review them."""

    __tablename__ = "users"

    user_id = Column(String(255), primary_key=True)
    username = Column(String(255), nullable=False)
    team_name = Column(String(255), ForeignKey("teams.team_name"), nullable=False)
    # Position inside the team's member list; defines reviewer selection order
    team_position = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    team = relationship("Team", back_populates="members")

    __table_args__ = (
        Index("ix_users_team_name_position", "team_name", "team_position"),
    )

    def __repr__(self):
        return (
            f"<User(user_id={self.user_id}, username={self.username}, "
            f"team={self.team_name}, active={self.is_active})>"
        )
