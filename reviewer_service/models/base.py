"""Declarative base shared by the team, user and pull request models."""
from sqlalchemy.orm import declarative_base

# One metadata registry: init_database() and alembic both read Base.metadata
Base = declarative_base()
