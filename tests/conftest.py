"""
Shared fixtures for the catalog tests.
"""

import pytest
from django.apps import apps
from django.core.cache import cache
from django.core.files.storage import FileSystemStorage
from rest_framework.test import APIClient

from catalog.repository import CatalogRepository


@pytest.fixture(autouse=True)
def _reset_throttle_cache():
    """Anonymous throttling keeps its counters in the cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def repository():
    """A fresh, unseeded repository."""
    return CatalogRepository()


@pytest.fixture
def storage(tmp_path):
    return FileSystemStorage(location=str(tmp_path / "blobs"))


@pytest.fixture
def live_repository(monkeypatch):
    """Swaps a fresh, unseeded repository into the running catalog app."""
    repo = CatalogRepository()
    monkeypatch.setattr(apps.get_app_config("catalog"), "repository", repo)
    return repo


@pytest.fixture
def upload_root(settings, tmp_path):
    """Points the 'uploads' storage alias at a temporary directory."""
    root = tmp_path / "uploads"
    settings.STORAGES = {
        **settings.STORAGES,
        "uploads": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": str(root)},
        },
    }
    return root


@pytest.fixture
def api_client():
    return APIClient()
