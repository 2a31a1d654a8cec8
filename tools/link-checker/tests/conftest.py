import threading

import pytest
import requests

import link_checker
from create_test_files import DEAD_HOST, build_doc_tree


class FakeResponse:
    def __init__(self, url, status_code):
        self.url = url
        self.status_code = status_code

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)


class FakeGet:
    """Stands in for requests.get: DEAD_HOST refuses connections, other hosts answer."""

    def __init__(self):
        self.requested = []
        self.statuses = {}
        self.errors = {}
        self.barrier = None
        self._lock = threading.Lock()

    def __call__(self, url, **kwargs):
        with self._lock:
            self.requested.append(url)
        if self.barrier is not None:
            self.barrier.wait()
        if url in self.errors:
            raise self.errors[url]
        if url.startswith(DEAD_HOST):
            raise requests.ConnectionError(f"Failed to resolve {url}")
        return FakeResponse(url, self.statuses.get(url, 200))


@pytest.fixture
def fake_get(monkeypatch):
    fake = FakeGet()
    monkeypatch.setattr(link_checker.requests, "get", fake)
    return fake


@pytest.fixture
def doc_tree(tmp_path):
    root = str(tmp_path / "project")
    expected = build_doc_tree(root)
    return root, expected
