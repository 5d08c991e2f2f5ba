"""WSGI entry point: gunicorn -c gunicorn_config.py wsgi:app"""

from reviewer_service.web_interface import configure_logging, create_app

configure_logging()
app = create_app()
