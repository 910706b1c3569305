"""
Gunicorn configuration for the game server panel.

Demo sessions and the demo reset window live in process memory, so every
worker keeps its own copy. Run a single worker (the default here) when demo
mode is on and scale with threads instead.
"""

from __future__ import annotations

import logging
import os

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")

# gthread: one process, many request threads; demo state is shared by the threads.
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
workers = int(os.environ.get("GUNICORN_WORKERS", "1"))
threads = int(os.environ.get("GUNICORN_THREADS", "8"))
max_requests = int(os.environ.get("GUNICORN_MAX_REQUESTS", "0"))

timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.environ.get("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.environ.get("GUNICORN_KEEPALIVE", "5"))

accesslog = os.environ.get("GUNICORN_ACCESSLOG", "-")
errorlog = os.environ.get("GUNICORN_ERRORLOG", "-")
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
capture_output = True

# Preloading would start the demo reset timer in the master, where it never serves requests.
preload_app = False

forwarded_allow_ips = os.environ.get("GUNICORN_FORWARDED_ALLOW_IPS", "*")
proc_name = os.environ.get("GUNICORN_PROC_NAME", "gamepanel")


def on_starting(server):
    logger = logging.getLogger(__name__)
    demo = os.environ.get("DEMO_MODE", "false").lower() in ("1", "true", "yes")
    if demo and workers > 1:
        logger.warning(
            f"Demo mode with {workers} workers: each worker keeps its own demo sessions and reset window"
        )
    logger.info(f"Gunicorn starting: workers={workers}, threads={threads}, worker_class={worker_class}")


def worker_exit(server, worker):
    """Stop the worker's demo reset timer before it exits."""
    app = getattr(worker, "wsgi", None)
    demo = getattr(app, "extensions", {}).get("demo") if app is not None else None
    if demo is not None:
        demo.shutdown()
