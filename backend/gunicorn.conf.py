# Entry point
wsgi_app = "users_api:create_app()"

# Bind & workers
bind = "0.0.0.0:8000"
# The user store lives in process memory: a single worker keeps one
# collection, concurrency comes from threads.
workers = 1
threads = 8
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Honour proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
