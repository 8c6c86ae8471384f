#!/usr/bin/env python3
"""
Bundlr Application Starter
Initializes the Application (services, db handle) then starts the API server.
"""

import logging
import signal
import sys

import uvicorn

from bundlr.app import application

# Configure logging once for the whole process
logging.basicConfig(
    level=getattr(logging, application.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def shutdown_handler(signum, frame):
    """Handle shutdown signals gracefully."""
    logging.info(f"Received signal {signum}, shutting down...")
    application.stop()
    sys.exit(0)


if __name__ == "__main__":
    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    logging.info("[Application] Starting Bundlr Application...")
    application.start()

    logging.info(
        "Effective config: arango=%s db=%s api=%s:%d",
        application.arango_hosts,
        application.arango_db_name,
        application.api_host,
        application.api_port,
    )

    try:
        uvicorn.run(
            "bundlr.interfaces.api.api_app:api_app",
            host=application.api_host,
            port=application.api_port,
            timeout_keep_alive=90,
            log_level="info",
        )
    finally:
        logging.info("API server stopped, cleaning up...")
        application.stop()
