import os

# Server Socket
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")

# Worker Settings
workers = int(os.environ.get("GUNICORN_WORKERS", 4))
threads = 2
worker_class = "gthread"

# Timeouts
timeout = 60
graceful_timeout = 30
keepalive = 5
max_requests = 1000  # Restart workers after 1000 requests
max_requests_jitter = 50

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("GUNICORN_LOG_LEVEL", "info")

# Process Name
proc_name = "ceps_gunicorn"
