"""
Shared test fixtures: FastAPI test client and calculator config.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Pin settings before importing app modules
os.environ["LEAD_SCORING_PRESET"] = "intake"
os.environ["LOG_LEVEL"] = "INFO"

from flofaction.config import DEFAULT_CONFIG
from flofaction.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def config():
    return DEFAULT_CONFIG
