"""SQLAlchemy-backed team store."""

import logging
from sqlalchemy.exc import IntegrityError

from reviewer_service.models import Team, User
from reviewer_service.models.dtos import TeamDTO, UserDTO
from reviewer_service.services.errors import TeamExistsError, TeamNotFoundError
from reviewer_service.utils.database import Database

logger = logging.getLogger(__name__)


class SqlTeamStore:
    """Persists teams and their ordered member lists."""

    def __init__(self, database: Database):
        self.database = database

    def create(self, team: TeamDTO) -> TeamDTO:
        """Insert a team and upsert its members in the given order.

        A member that already exists is moved to this team and takes the
        username and active flag from the request.
        """
        try:
            with self.database.session_scope() as session:
                if session.get(Team, team.team_name) is not None:
                    raise TeamExistsError(team.team_name)

                session.add(Team(team_name=team.team_name))
                session.flush()

                for position, member in enumerate(team.members):
                    user = session.get(User, member.user_id)
                    if user is None:
                        user = User(user_id=member.user_id)
                        session.add(user)
                    elif user.team_name != team.team_name:
                        logger.info(
                            f"Moving user {member.user_id} from team {user.team_name} to {team.team_name}"
                        )
                    user.username = member.username
                    user.is_active = member.is_active
                    user.team_name = team.team_name
                    user.team_position = position
                session.flush()

                members = (
                    session.query(User)
                    .filter_by(team_name=team.team_name)
                    .order_by(User.team_position, User.user_id)
                    .all()
                )
                return TeamDTO(
                    team_name=team.team_name,
                    members=[UserDTO.from_orm(member) for member in members],
                )
        except IntegrityError:
            # Lost a race against a concurrent create of the same team
            if self._exists(team.team_name):
                raise TeamExistsError(team.team_name)
            raise

    def get(self, team_name: str) -> TeamDTO:
        with self.database.session_scope() as session:
            team = session.get(Team, team_name)
            if team is None:
                raise TeamNotFoundError(team_name)
            return TeamDTO.from_orm(team)

    def _exists(self, team_name: str) -> bool:
        with self.database.session_scope() as session:
            return session.get(Team, team_name) is not None
