"""
Place guide – main application entry point

* Flask app serving the location JSON API under ``/location``.
* One ``LocationStore`` is created per app and injected into the blueprint;
  it holds the current location and the cached AI results in memory.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from place_guide.api.services.location_store import LocationStore  # noqa: E402
from place_guide.routes.location import create_location_blueprint  # noqa: E402


# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
def create_app(store=None):
    """Build the Flask app around ``store`` (a fresh LocationStore by default)."""
    app = Flask(__name__)

    # CORS for local dev / cross‑origin front‑end requests
    CORS(app, origins=os.getenv("CORS_ORIGINS", "*").split(","))

    app.extensions["location_store"] = store or LocationStore()
    app.register_blueprint(create_location_blueprint(app.extensions["location_store"]))
    return app


app = create_app()


@app.route("/debug")
def debug():
    """Simple JSON health endpoint."""
    return {
        "status": "ok",
        "endpoints": {
            "state": "/location/api/state",
            "health": "/location/health",
        },
    }


# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    from place_guide.api.config import get_port

    port = get_port()
    logger.info("Starting place guide on http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port, debug=False)

__all__ = ["app", "create_app"]
