# resenas_api/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage.review_store import ReviewStore

# CORS is a real Flask extension (keeps init_app)
cors = CORS(resources={r"/api/*": {"origins": "*"}}, send_wildcard=True)

STORE_KEY = "review_store"


def init_store(app) -> ReviewStore:
    """Attach a ReviewStore for the app's configured storage file."""
    store = ReviewStore(app.config["STORAGE_PATH"])
    app.extensions[STORE_KEY] = store
    return store


def get_store() -> ReviewStore:
    return current_app.extensions[STORE_KEY]
