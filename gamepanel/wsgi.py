"""WSGI entrypoint for the panel."""

from __future__ import annotations

import logging
import os

from gamepanel import create_app

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

app = create_app()

if __name__ == "__main__":
    host = os.environ.get("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.environ.get("FLASK_RUN_PORT", "5001"))
    app.run(host=host, port=port)  # nosec B104
