"""Team model."""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class Team(Base):
    """A named group of users that review each other's pull requests."""

    __tablename__ = "teams"

    team_name = Column(String(255), primary_key=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Members in the order they were listed when the team was created
    members = relationship(
        "User",
        back_populates="team",
        order_by="User.team_position",
    )

    def __repr__(self):
        return f"<Team(team_name={self.team_name}, members={len(self.members)})>"
