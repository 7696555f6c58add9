"""
Route Tests
===========
Every page and form handler, with the backend replaced by FakeTaskApi.
"""
from urllib.parse import parse_qs, urlsplit

from task_frontend.models.task import TaskStatus
from task_frontend.services.task_api import TaskApiError

from fakes import make_task


def redirect_target(response):
    """Split a redirect Location into (path, {param: value})."""
    location = urlsplit(response.headers["location"])
    params = {key: values[0] for key, values in parse_qs(location.query).items()}
    return location.path, params


# ============================================================================
# HOME
# ============================================================================

class TestHome:
    def test_renders_summary_and_example(self, client, fake_api):
        fake_api.tasks = {
            1: make_task(id=1, status="PENDING", dueDate="2000-01-01T00:00:00"),
            2: make_task(id=2, status="COMPLETED"),
        }
        response = client.get("/")
        assert response.status_code == 200
        assert "HMCTS Task Management System" in response.text
        assert 'id="summary-total">2<' in response.text
        assert 'id="summary-overdue">1<' in response.text
        assert "ABC12345" in response.text

    def test_example_failure_keeps_summary(self, client, fake_api):
        fake_api.errors["get_example_case"] = TaskApiError("down", unreachable=True)
        response = client.get("/")
        assert response.status_code == 200
        assert "Some services may be unavailable" in response.text
        assert 'id="summary-total">1<' in response.text

    def test_summary_failure_keeps_example(self, client, fake_api):
        fake_api.errors["list_tasks"] = TaskApiError("down", status_code=500)
        response = client.get("/")
        assert response.status_code == 200
        assert "ABC12345" in response.text
        assert "Task summary is not available" in response.text
        assert "Some services may be unavailable" not in response.text


# ============================================================================
# LIST
# ============================================================================

class TestListTasks:
    def test_lists_tasks(self, client):
        response = client.get("/tasks")
        assert response.status_code == 200
        assert "Review bundle" in response.text
        assert 'href="/tasks/1"' in response.text

    def test_shows_query_messages(self, client):
        response = client.get("/tasks", params={"success": "Saved it", "error": "Oops"})
        assert "Saved it" in response.text
        assert "Oops" in response.text

    def test_messages_are_escaped(self, client):
        response = client.get("/tasks", params={"error": "<script>x</script>"})
        assert "<script>x</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    def test_backend_unreachable_renders_empty_list(self, client, fake_api):
        fake_api.errors["list_tasks"] = TaskApiError("down", unreachable=True)
        response = client.get("/tasks")
        assert response.status_code == 200
        assert "Failed to load tasks. Please check if the backend is running on" in response.text
        assert "No tasks found." in response.text

    def test_backend_error_status_is_reported(self, client, fake_api):
        fake_api.errors["list_tasks"] = TaskApiError("boom", status_code=503)
        response = client.get("/tasks")
        assert response.status_code == 200
        assert "Server responded with status 503" in response.text

    def test_other_failure(self, client, fake_api):
        fake_api.errors["list_tasks"] = TaskApiError("bad json")
        response = client.get("/tasks")
        assert "Failed to load tasks. Please try again." in response.text


# ============================================================================
# CREATE
# ============================================================================

class TestCreateTask:
    def test_new_form(self, client):
        response = client.get("/tasks/new")
        assert response.status_code == 200
        assert "Create New Task" in response.text
        assert 'name="title"' in response.text

    def test_empty_title_never_reaches_backend(self, client, fake_api):
        response = client.post("/tasks", data={"title": "", "description": "kept text"})
        assert response.status_code == 200
        assert "Task title is required" in response.text
        assert "kept text" in response.text
        assert fake_api.called("create_task") == []

    def test_long_fields_rejected(self, client, fake_api):
        response = client.post("/tasks", data={"title": "t" * 256, "description": "d" * 1001})
        assert "Task title must be less than 255 characters" in response.text
        assert "Task description must be less than 1000 characters" in response.text
        assert fake_api.called("create_task") == []

    def test_success_redirects_with_message(self, client, fake_api):
        response = client.post("/tasks", data={
            "title": "  New hearing  ",
            "description": "",
            "status": "IN_PROGRESS",
            "dueDate": "2030-02-01T09:00",
        })
        assert response.status_code == 303
        path, params = redirect_target(response)
        assert path == "/tasks"
        assert params["success"] == 'Task "New hearing" created successfully'

        (_, payload), = fake_api.called("create_task")
        assert payload.title == "New hearing"
        assert payload.description is None
        assert payload.status is TaskStatus.IN_PROGRESS
        assert payload.due_date.endswith("Z")

    def test_status_defaults_to_pending(self, client, fake_api):
        client.post("/tasks", data={"title": "Plain"})
        (_, payload), = fake_api.called("create_task")
        assert payload.status is TaskStatus.PENDING

    def test_bad_request_from_backend(self, client, fake_api):
        fake_api.errors["create_task"] = TaskApiError("bad", status_code=400)
        response = client.post("/tasks", data={"title": "Kept title"})
        assert response.status_code == 200
        assert "Failed to create task. Please check your input data." in response.text
        assert "Kept title" in response.text

    def test_backend_unreachable(self, client, fake_api):
        fake_api.errors["create_task"] = TaskApiError("down", unreachable=True)
        response = client.post("/tasks", data={"title": "Kept title"})
        assert "Failed to create task. Backend server is not reachable." in response.text


# ============================================================================
# DETAIL
# ============================================================================

class TestShowTask:
    def test_renders_task(self, client):
        response = client.get("/tasks/1")
        assert response.status_code == 200
        assert "Task: Review bundle" in response.text
        assert "15 January 2099 at 10:30" in response.text

    def test_description_newlines(self, client, fake_api):
        fake_api.tasks[1] = make_task(description="first\nsecond")
        response = client.get("/tasks/1")
        assert "first<br>second" in response.text

    def test_non_numeric_id_is_404_without_backend_call(self, client, fake_api):
        response = client.get("/tasks/abc")
        assert response.status_code == 404
        assert "Invalid task ID" in response.text
        assert fake_api.calls == []

    def test_not_found(self, client):
        response = client.get("/tasks/42")
        assert response.status_code == 404
        assert "Task not found" in response.text

    def test_other_failure_redirects_to_list(self, client, fake_api):
        fake_api.errors["get_task"] = TaskApiError("boom", status_code=500)
        response = client.get("/tasks/1")
        assert response.status_code == 303
        assert redirect_target(response) == ("/tasks", {"error": "Failed to load task"})


# ============================================================================
# STATUS UPDATE
# ============================================================================

class TestUpdateStatus:
    def test_success(self, client, fake_api):
        response = client.post("/tasks/1/status", data={"status": "IN_PROGRESS"})
        assert response.status_code == 303
        assert redirect_target(response) == ("/tasks/1", {"success": "Task status updated to in progress"})
        assert fake_api.called("update_task_status") == [("update_task_status", 1, TaskStatus.IN_PROGRESS)]

    def test_missing_status(self, client, fake_api):
        response = client.post("/tasks/1/status", data={})
        assert redirect_target(response) == ("/tasks/1", {"error": "Invalid status"})
        assert fake_api.calls == []

    def test_unknown_status(self, client, fake_api):
        response = client.post("/tasks/1/status", data={"status": "ARCHIVED"})
        assert redirect_target(response) == ("/tasks/1", {"error": "Invalid status"})
        assert fake_api.calls == []

    def test_non_numeric_id(self, client, fake_api):
        response = client.post("/tasks/abc/status", data={"status": "PENDING"})
        assert redirect_target(response) == ("/tasks", {"error": "Invalid task ID"})
        assert fake_api.calls == []

    def test_backend_failure(self, client, fake_api):
        fake_api.errors["update_task_status"] = TaskApiError("boom", status_code=500)
        response = client.post("/tasks/1/status", data={"status": "COMPLETED"})
        assert redirect_target(response) == ("/tasks/1", {"error": "Failed to update task status"})


# ============================================================================
# DELETE
# ============================================================================

class TestDeleteTask:
    def test_success_names_the_task(self, client, fake_api):
        response = client.post("/tasks/1/delete")
        assert response.status_code == 303
        assert redirect_target(response) == ("/tasks", {"success": 'Task "Review bundle" deleted successfully'})
        assert [call[0] for call in fake_api.calls] == ["get_task", "delete_task"]

    def test_not_found(self, client, fake_api):
        response = client.post("/tasks/42/delete")
        assert response.status_code == 303
        assert redirect_target(response) == ("/tasks", {"error": "Task not found"})
        assert fake_api.called("delete_task") == []

    def test_delete_failure(self, client, fake_api):
        fake_api.errors["delete_task"] = TaskApiError("boom", status_code=500)
        response = client.post("/tasks/1/delete")
        assert redirect_target(response) == ("/tasks", {"error": "Failed to delete task"})

    def test_non_numeric_id(self, client, fake_api):
        response = client.post("/tasks/abc/delete")
        assert redirect_target(response) == ("/tasks", {"error": "Invalid task ID"})
        assert fake_api.calls == []


# ============================================================================
# HEALTH / ERRORS
# ============================================================================

class TestHealthAndErrors:
    def test_health_healthy(self, client, monkeypatch):
        monkeypatch.setattr("task_frontend.services.task_api.ping", lambda: None)
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["backend"] == "connected"

    def test_health_degraded(self, client, monkeypatch):
        monkeypatch.setattr("task_frontend.services.task_api.ping", lambda: "Backend server is not reachable")
        data = client.get("/health").json()
        assert data["status"] == "degraded"
        assert data["error"] == "Backend server is not reachable"

    def test_unknown_page_renders_404(self, client):
        response = client.get("/no/such/page")
        assert response.status_code == 404
        assert "Page not found" in response.text

    def test_wrong_method_keeps_allow_header(self, client):
        response = client.post("/")
        assert response.status_code == 405
        assert "GET" in response.headers["allow"]
