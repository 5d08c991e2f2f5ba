"""SQLAlchemy-backed user store."""

import logging
from typing import List

from reviewer_service.models import User
from reviewer_service.models.dtos import UserDTO
from reviewer_service.services.errors import UserNotFoundError
from reviewer_service.utils.database import Database

logger = logging.getLogger(__name__)


class SqlUserStore:
    """Reads users and toggles their review availability."""

    def __init__(self, database: Database):
        self.database = database

    def get_by_id(self, user_id: str) -> UserDTO:
        with self.database.session_scope() as session:
            user = session.get(User, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            return UserDTO.from_orm(user)

    def set_active(self, user_id: str, is_active: bool) -> UserDTO:
        with self.database.session_scope() as session:
            user = session.get(User, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            user.is_active = is_active
            session.flush()
            return UserDTO.from_orm(user)

    def get_active_team_members(self, team_name: str, exclude_id: str) -> List[UserDTO]:
        """Active members of team_name other than exclude_id, in team order."""
        with self.database.session_scope() as session:
            members = (
                session.query(User)
                .filter(
                    User.team_name == team_name,
                    User.is_active.is_(True),
                    User.user_id != exclude_id,
                )
                .order_by(User.team_position, User.user_id)
                .all()
            )
            return [UserDTO.from_orm(member) for member in members]
