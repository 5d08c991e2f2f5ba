"""Pytest configuration and shared fixtures."""

import pytest
import os
from datetime import datetime, timedelta

import pytz

# Set test environment variables before importing app
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from reviewer_service.models.dtos import TeamDTO, UserDTO
from reviewer_service.repositories.pull_request_store import SqlPullRequestStore
from reviewer_service.repositories.team_store import SqlTeamStore
from reviewer_service.repositories.user_store import SqlUserStore
from reviewer_service.services.review_service import ReviewService
from reviewer_service.utils.database import Database
from reviewer_service.web_interface import create_app


class FakeClock:
    """Deterministic clock; advance() moves time forward."""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 11, 20, 9, 30, 0, tzinfo=pytz.UTC)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)
        return self.current


def make_team(team_name, members):
    """Build a TeamDTO from (user_id, username, is_active) tuples."""
    return TeamDTO(
        team_name=team_name,
        members=[
            UserDTO(user_id=user_id, username=username, team_name=team_name, is_active=is_active)
            for user_id, username, is_active in members
        ],
    )


@pytest.fixture
def database():
    """Fresh in-memory database with all tables."""
    db = Database("sqlite://")
    db.init_database()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def team_store(database):
    return SqlTeamStore(database)


@pytest.fixture
def user_store(database):
    return SqlUserStore(database)


@pytest.fixture
def pr_store(database):
    return SqlPullRequestStore(database)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def review_service(team_store, user_store, pr_store, clock):
    return ReviewService(team_store, user_store, pr_store, clock=clock)


@pytest.fixture
def dev_team(review_service):
    """dev-team: Alice, Bob, Charlie active; David inactive."""
    return review_service.add_team(make_team("dev-team", [
        ("alice", "Alice", True),
        ("bob", "Bob", True),
        ("charlie", "Charlie", True),
        ("david", "David", False),
    ]))


@pytest.fixture
def app(database, review_service):
    """Create Flask app for testing."""
    flask_app = create_app(database=database, review_service=review_service)
    flask_app.config["TESTING"] = True
    yield flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def add_team_payload(team_name, members):
    """JSON body for POST /team/add from (user_id, username, is_active) tuples."""
    return {
        "team_name": team_name,
        "members": [
            {"user_id": user_id, "username": username, "is_active": is_active}
            for user_id, username, is_active in members
        ],
    }
