import os

# Bind to the port provided via the PORT environment variable, defaulting to
# 5000.
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# The rendered invoice list is cached in process memory and revalidated by
# the process that handled the mutation, so all requests must be served by
# a single worker.  Threads give concurrency within that worker.
worker_class = "gthread"
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30
