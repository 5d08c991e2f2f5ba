"""User routes: review availability and assigned reviews."""
from flask import Blueprint, jsonify
import logging

from reviewer_service.models.validators import SetUserActiveRequest
from reviewer_service.routes.common import get_review_service, parse_body, require_query_param

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__, url_prefix='/users')


@users_bp.route('/setIsActive', methods=['POST'])
def set_user_is_active():
    """Toggle whether a user can be assigned as reviewer."""
    req = parse_body(SetUserActiveRequest)
    user = get_review_service().set_user_active(req.user_id, req.is_active)
    return jsonify({'user': user.to_dict()}), 200


@users_bp.route('/getReview', methods=['GET'])
def get_user_reviews():
    """List pull requests where the user is a reviewer."""
    user_id = require_query_param('user_id')
    pull_requests = get_review_service().get_user_reviews(user_id)

    return jsonify({
        'user_id': user_id,
        'pull_requests': [pr.to_short_dict() for pr in pull_requests],
    }), 200
