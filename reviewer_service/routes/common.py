"""Request helpers shared by the API blueprints."""
from flask import current_app, request

from reviewer_service.routes.errors import BadRequest


def get_review_service():
    """The ReviewService attached to the running app by create_app()."""
    return current_app.review_service


def parse_body(model):
    """Validate the JSON body against a pydantic model.

    Raises BadRequest for a missing/non-object body; pydantic's
    ValidationError propagates for field errors.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return model.model_validate(data)


def require_query_param(name: str) -> str:
    value = request.args.get(name, "").strip()
    if not value:
        raise BadRequest(f"{name} query parameter is required")
    return value
