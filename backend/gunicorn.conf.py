import os

# Application
wsgi_app = "newsletter:create_app()"

# Bind & workers; each request runs on its own thread
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
# Workers share sessions through Redis; production refuses to start without REDIS_URL
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60  # above EMAIL_TIMEOUT_SECONDS plus an Argon2 verification
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by the container runtime)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
