"""
Shared test fixtures and configuration for the reviews API tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from resenas_api import create_app
from resenas_api.config import TestConfig
from resenas_api.storage.review_store import ReviewStore


SAMPLE_REVIEWS = [
    {
        "id": 1,
        "autores": ["J.R.R. Tolkien"],
        "titulo": "El Señor de los Anillos",
        "serie": "Tierra Media",
        "valoracion": 5,
        "comentarios": "Un clásico",
    },
    {
        "id": 2,
        "autores": ["Terry Pratchett", "Neil Gaiman"],
        "titulo": "Buenos presagios",
        "serie": "N/A",
        "valoracion": 4,
        "comentarios": "",
    },
    {
        "id": 5,
        "autores": ["Brandon Sanderson"],
        "titulo": "El imperio final",
        "serie": "Nacidos de la bruma",
        "valoracion": 3,
        "comentarios": "Buen sistema de magia",
    },
]


@pytest.fixture
def sample_reviews() -> list:
    """Raw stored records used to seed storage."""
    return json.loads(json.dumps(SAMPLE_REVIEWS))


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    """Path of an (initially absent) storage document."""
    return tmp_path / "data" / "resenas.json"


@pytest.fixture
def seeded_storage_path(storage_path: Path) -> Path:
    """Storage document pre-filled with SAMPLE_REVIEWS."""
    write_document(storage_path, SAMPLE_REVIEWS)
    return storage_path


@pytest.fixture
def review_store(storage_path: Path) -> ReviewStore:
    """Create a ReviewStore backed by a temporary file."""
    return ReviewStore(storage_path)


@pytest.fixture
def seeded_store(seeded_storage_path: Path) -> ReviewStore:
    return ReviewStore(seeded_storage_path)


@pytest.fixture
def app(storage_path: Path) -> Flask:
    """Create a test Flask application with its own storage file."""
    app = create_app(TestConfig, STORAGE_PATH=storage_path)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def seeded_client(seeded_storage_path: Path) -> FlaskClient:
    """Test client whose storage already holds SAMPLE_REVIEWS."""
    return create_app(TestConfig, STORAGE_PATH=seeded_storage_path).test_client()


# Helper functions for tests

def write_document(path: Path, data) -> None:
    """Write ``data`` as the storage document at ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

