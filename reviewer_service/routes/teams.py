"""Team management routes."""
from flask import Blueprint, jsonify
import logging

from reviewer_service.models.dtos import TeamDTO, UserDTO
from reviewer_service.models.validators import AddTeamRequest
from reviewer_service.routes.common import get_review_service, parse_body, require_query_param

logger = logging.getLogger(__name__)

teams_bp = Blueprint('teams', __name__, url_prefix='/team')


@teams_bp.route('/add', methods=['POST'])
def add_team():
    """Create a team with its members (creates or updates the users)."""
    req = parse_body(AddTeamRequest)

    team = TeamDTO(
        team_name=req.team_name,
        members=[
            UserDTO(
                user_id=member.user_id,
                username=member.username,
                team_name=req.team_name,
                is_active=member.is_active,
            )
            for member in req.members
        ],
    )
    created = get_review_service().add_team(team)

    return jsonify({'team': created.to_dict()}), 201


@teams_bp.route('/get', methods=['GET'])
def get_team():
    """Get a team with its members in stored order."""
    team_name = require_query_param('team_name')
    team = get_review_service().get_team(team_name)
    return jsonify(team.to_dict()), 200
