# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - fresh_config (autouse)  → clears MONGOSHAPE_* env vars and the config singleton
# - object_id_hex           → a valid 24-char hex ObjectId string
# - user_documents          → ten heterogeneous user documents
# ==============================================

import datetime

import pytest
from bson import ObjectId

from mongoshape.config import reset_config


CONFIG_ENV_VARS = [
    "MONGOSHAPE_MAX_EXAMPLES",
    "MONGOSHAPE_SAMPLE_SIZE",
    "MONGOSHAPE_OBJECTID_MODE",
    "MONGOSHAPE_MAX_DEPTH",
    "MONGOSHAPE_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from default configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def object_id_hex() -> str:
    return "507f1f77bcf86cd799439011"


@pytest.fixture
def user_documents() -> list:
    """
    Ten users. Four have an address sub-document (two of them
    with a zip code), one has a plain-string address, the
    rest have none.
    """
    created = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    documents = []
    for i in range(10):
        documents.append({
            "_id": ObjectId(f"{i:024x}"),
            "username": f"user{i}",
            "age": 20 + i,
            "createdAt": created,
        })

    documents[0]["address"] = {"city": "Pune", "zip": "411001"}
    documents[1]["address"] = {"city": "Delhi"}
    documents[2]["address"] = {"city": "Mumbai", "zip": "400001"}
    documents[3]["address"] = {"city": "Pune"}
    documents[4]["address"] = "unknown"
    return documents
