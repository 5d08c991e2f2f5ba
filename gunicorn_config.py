"""
Gunicorn configuration for the PR reviewer service.

The master process waits for the database and creates missing tables once
before forking, so workers never race each other on schema creation.
"""

import logging
import os

logger = logging.getLogger(__name__)

# Gunicorn server settings
bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
workers = int(os.getenv('GUNICORN_WORKERS', '4'))
threads = int(os.getenv('GUNICORN_THREADS', '2'))
timeout = 120
worker_class = 'gthread'

# Logging
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
accesslog = '-'
errorlog = '-'


def on_starting(server):
    """
    Called once in the master process before workers are forked.
    Blocks until the database accepts connections, then creates tables.
    """
    from reviewer_service.config.settings import settings
    from reviewer_service.utils.database import Database
    from reviewer_service.utils.retry_logic import wait_for_database

    database = Database.from_config(settings.database)
    try:
        wait_for_database(
            database,
            max_retries=settings.database.connect_retries,
            base_delay=settings.database.connect_retry_delay,
        )
        database.init_database()
        logger.info("Database ready, starting workers")
    finally:
        # Connections must not be shared with forked workers
        database.dispose()


def worker_exit(server, worker):
    """
    Called when a worker is exiting.
    Return pooled connections instead of leaving them for the server to time out.
    """
    try:
        from wsgi import app

        app.database.dispose()
        logger.info(f"Worker {worker.pid} released database connections")
    except Exception as e:
        logger.error(f"Error disposing database in worker {worker.pid}: {e}")
