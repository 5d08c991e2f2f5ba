"""Flask application factory for the PR reviewer service API."""

from flask import Flask, request
import atexit
import logging
from typing import Optional

from reviewer_service.config.settings import settings
from reviewer_service.repositories.pull_request_store import SqlPullRequestStore
from reviewer_service.repositories.team_store import SqlTeamStore
from reviewer_service.repositories.user_store import SqlUserStore
from reviewer_service.routes.errors import register_error_handlers
from reviewer_service.routes.health import health_bp
from reviewer_service.routes.pull_requests import pull_requests_bp
from reviewer_service.routes.teams import teams_bp
from reviewer_service.routes.users import users_bp
from reviewer_service.services.review_service import ReviewService
from reviewer_service.utils.database import Database

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None):
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level or settings.app.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_review_service(database: Database) -> ReviewService:
    """Wire the SQL stores into a ReviewService."""
    return ReviewService(
        team_store=SqlTeamStore(database),
        user_store=SqlUserStore(database),
        pr_store=SqlPullRequestStore(database),
    )


def create_app(database: Optional[Database] = None,
               review_service: Optional[ReviewService] = None,
               create_tables: bool = False) -> Flask:
    """Create the Flask app.

    Args:
        database: Database handle; built from settings when omitted, and then
            disposed when the process exits
        review_service: Service to expose; built from database when omitted
        create_tables: Run create_all on startup (development / SQLite)
    """
    owns_database = database is None
    if database is None:
        database = Database.from_config(settings.database)
        atexit.register(database.dispose)

    if create_tables:
        database.init_database()

    app = Flask(__name__)
    app.config['TESTING'] = settings.app.testing
    app.json.sort_keys = False

    app.database = database
    app.review_service = review_service or build_review_service(database)

    @app.before_request
    def log_request_info():
        """Log incoming request details."""
        logger.info("Request: %s %s", request.method, request.path)

    @app.after_request
    def log_response_info(response):
        """Log response status."""
        logger.info("Response: %s %s - %d", request.method, request.path, response.status_code)
        return response

    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(teams_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(pull_requests_bp)

    logger.info(
        f"App created (database={database.engine.dialect.name}, owns_database={owns_database})"
    )
    return app
