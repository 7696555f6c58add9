import pytest
from fastapi.testclient import TestClient

from task_frontend.main import app
from task_frontend.services import task_api

from fakes import FakeTaskApi


@pytest.fixture
def fake_api(monkeypatch):
    fake = FakeTaskApi()
    for name in ("list_tasks", "get_task", "create_task", "update_task_status", "delete_task", "get_example_case"):
        monkeypatch.setattr(task_api, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(fake_api):
    """Test client with the backend replaced by FakeTaskApi."""
    return TestClient(app, follow_redirects=False)
