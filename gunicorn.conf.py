"""Gunicorn config for running the carcatalog API in a container."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each Uvicorn worker runs its own lifespan and holds its own DatasetStore.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# First requests on a cold worker block until the CSV is loaded
timeout = 60
graceful_timeout = 30

# Must exceed the proxy keep-alive (default 60s)
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("CARCATALOG_LOG_LEVEL", "info").lower()

wsgi_app = "carcatalog.main:app"
