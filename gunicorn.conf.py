"""
Gunicorn configuration for production deployment
Run with: gunicorn achievehub.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"

# Worker lifecycle
max_requests = 1000
max_requests_jitter = 100

# Timeouts (document uploads up to 10MB)
timeout = 60
keepalive = 5
graceful_timeout = 30

# Process naming
proc_name = "achievehub_api"

# Server mechanics
daemon = False  # Docker handles this
pidfile = None

# Logging
accesslog = "-"  # Log to stdout
errorlog = "-"   # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()


# Server hooks
def on_starting(server):
    server.log.info("Starting achievement API")


def when_ready(server):
    server.log.info("Gunicorn server is ready. Spawning workers")


def worker_abort(worker):
    worker.log.info("Worker received SIGABRT signal")
