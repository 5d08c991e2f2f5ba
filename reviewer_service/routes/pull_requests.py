"""Pull request lifecycle routes."""
from flask import Blueprint, jsonify
import logging

from reviewer_service.models.validators import (
    CreatePullRequestRequest,
    MergePullRequestRequest,
    ReassignReviewerRequest,
)
from reviewer_service.routes.common import get_review_service, parse_body

logger = logging.getLogger(__name__)

pull_requests_bp = Blueprint('pull_requests', __name__, url_prefix='/pullRequest')


@pull_requests_bp.route('/create', methods=['POST'])
def create_pull_request():
    """Create a pull request and auto-assign up to two reviewers."""
    req = parse_body(CreatePullRequestRequest)
    pr = get_review_service().create_pull_request(
        req.pull_request_id, req.pull_request_name, req.author_id
    )
    return jsonify({'pr': pr.to_dict()}), 201


@pull_requests_bp.route('/merge', methods=['POST'])
def merge_pull_request():
    """Merge a pull request. Repeated merges return the same result."""
    req = parse_body(MergePullRequestRequest)
    pr = get_review_service().merge_pull_request(req.pull_request_id)
    return jsonify({'pr': pr.to_dict()}), 200


@pull_requests_bp.route('/reassign', methods=['POST'])
def reassign_reviewer():
    """Replace one reviewer with another active member of their team."""
    req = parse_body(ReassignReviewerRequest)
    pr, replaced_by = get_review_service().reassign_reviewer(
        req.pull_request_id, req.old_user_id
    )
    return jsonify({'pr': pr.to_dict(), 'replaced_by': replaced_by}), 200
