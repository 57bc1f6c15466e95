"""任务接口的集成测试用例：分派、状态推进及其副作用。"""

import pytest
from fastapi.testclient import TestClient

DRIVER = {"name": "Hasan", "surname": "Çelik", "phone": "05061234567"}
TARGET = {"lat": 36.2021, "lng": 36.1604}


@pytest.fixture()
def assignment(client: TestClient, coordinator_headers, make_user, make_vehicle, make_request, organization_id):
    owner = make_user(role="arac_sahibi")
    requester = make_user(role="talep_eden", organization_id=organization_id)
    vehicle = make_vehicle(owner["headers"], vehicle_type="kamyon", capacity=10)
    request = make_request(requester["headers"], vehicles=[{"vehicle_type": "kamyon", "count": 1}])
    return {"owner": owner, "requester": requester, "vehicle": vehicle, "request": request}


def _assign(client: TestClient, headers: dict, assignment: dict, **overrides):
    body = {
        "request_id": assignment["request"]["id"],
        "vehicle_id": assignment["vehicle"]["id"],
        "driver": DRIVER,
        "target_location": TARGET,
    }
    body.update(overrides)
    return client.post("/api/v1/tasks", json=body, headers=headers)


def test_assign_task_side_effects(client: TestClient, coordinator_headers, assignment):
    response = _assign(client, coordinator_headers, assignment, note="Acil")
    assert response.status_code == 200
    task = response.json()["data"]
    assert task["status"] == "beklemede"
    assert task["driver"] == DRIVER
    assert task["target_location"] == TARGET
    assert task["started_at"] is None

    request = client.get(f"/api/v1/requests/{assignment['request']['id']}", headers=coordinator_headers).json()["data"]
    assert request["status"] == "gorevlendirildi"
    assert request["tasks"] == [{"id": task["id"], "vehicle_id": assignment["vehicle"]["id"], "status": "beklemede"}]

    vehicle = client.get(f"/api/v1/vehicles/{assignment['vehicle']['id']}", headers=coordinator_headers).json()["data"]
    assert vehicle["is_available"] is False

    owner_notes = client.get("/api/v1/notifications", headers=assignment["owner"]["headers"]).json()["data"]["items"]
    assert owner_notes[0]["type"] == "gorev"
    assert owner_notes[0]["target_url"] == f"/tasks/{task['id']}"


def test_unavailable_vehicle_cannot_be_assigned_twice(client: TestClient, coordinator_headers, assignment):
    assert _assign(client, coordinator_headers, assignment).status_code == 200

    second = _assign(client, coordinator_headers, assignment)
    assert second.status_code == 400
    assert second.json()["msg"] == "车辆当前不可用"


def test_partial_driver_is_rejected(client: TestClient, coordinator_headers, assignment):
    response = _assign(client, coordinator_headers, assignment, driver={"name": "Hasan"})
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {
        "driver.surname": "该字段为必填项",
        "driver.phone": "该字段为必填项",
    }


def test_missing_target_location_is_rejected(client: TestClient, coordinator_headers, assignment):
    body = {
        "request_id": assignment["request"]["id"],
        "vehicle_id": assignment["vehicle"]["id"],
        "driver": DRIVER,
    }
    response = client.post("/api/v1/tasks", json=body, headers=coordinator_headers)
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {
        "target_location.lat": "该字段为必填项",
        "target_location.lng": "该字段为必填项",
    }


def test_assign_to_missing_request_is_404(client: TestClient, coordinator_headers, assignment):
    response = _assign(client, coordinator_headers, assignment, request_id=999999)
    assert response.status_code == 404


def test_only_coordinators_assign(client: TestClient, assignment):
    response = _assign(client, assignment["owner"]["headers"], assignment)
    assert response.status_code == 403


def test_owner_progresses_task_to_completion(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    owner_headers = assignment["owner"]["headers"]

    started = client.put(f"/api/v1/tasks/{task['id']}/status", json={"status": "başladı"}, headers=owner_headers)
    assert started.status_code == 200
    assert started.json()["data"]["started_at"] is not None
    assert started.json()["data"]["finished_at"] is None

    done = client.put(
        f"/api/v1/tasks/{task['id']}/status",
        json={"status": "tamamlandı", "note": "Teslim edildi"},
        headers=owner_headers,
    )
    assert done.status_code == 200
    data = done.json()["data"]
    assert data["status"] == "tamamlandı"
    assert data["note"] == "Teslim edildi"
    assert data["finished_at"] is not None

    vehicle = client.get(f"/api/v1/vehicles/{assignment['vehicle']['id']}", headers=owner_headers).json()["data"]
    assert vehicle["is_available"] is True

    request = client.get(f"/api/v1/requests/{assignment['request']['id']}", headers=coordinator_headers).json()["data"]
    assert request["status"] == "tamamlandı"

    coordinator_notes = client.get("/api/v1/notifications", headers=coordinator_headers).json()["data"]["items"]
    assert coordinator_notes[0]["type"] == "gorev"


def test_task_can_jump_straight_to_completed(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    response = client.put(f"/api/v1/tasks/{task['id']}/status", json={"status": "tamamlandı"}, headers=coordinator_headers)
    assert response.status_code == 200
    assert response.json()["data"]["started_at"] is None


def test_cancelled_task_frees_vehicle_but_keeps_request_open(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    response = client.put(f"/api/v1/tasks/{task['id']}/status", json={"status": "iptal edildi"}, headers=coordinator_headers)
    assert response.status_code == 200

    vehicle = client.get(f"/api/v1/vehicles/{assignment['vehicle']['id']}", headers=coordinator_headers).json()["data"]
    assert vehicle["is_available"] is True
    request = client.get(f"/api/v1/requests/{assignment['request']['id']}", headers=coordinator_headers).json()["data"]
    assert request["status"] == "gorevlendirildi"


def test_invalid_task_status_is_rejected(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    response = client.put(f"/api/v1/tasks/{task['id']}/status", json={"status": "gorevlendirildi"}, headers=coordinator_headers)
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {"status": "取值不在允许范围内"}


def test_task_visibility_per_role(client: TestClient, coordinator_headers, make_user, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    stranger = make_user(role="arac_sahibi")

    owner_tasks = client.get("/api/v1/tasks", headers=assignment["owner"]["headers"]).json()["data"]
    assert [item["id"] for item in owner_tasks] == [task["id"]]

    assert client.get("/api/v1/tasks", headers=stranger["headers"]).json()["data"] == []
    assert client.get(f"/api/v1/tasks/{task['id']}", headers=stranger["headers"]).status_code == 403
    assert client.get("/api/v1/tasks", headers=assignment["requester"]["headers"]).status_code == 403

    filtered = client.get("/api/v1/tasks", params={"request_id": assignment["request"]["id"]}, headers=coordinator_headers)
    assert [item["id"] for item in filtered.json()["data"]] == [task["id"]]


def test_out_of_range_ids_are_not_found(client: TestClient, coordinator_headers, assignment):
    response = _assign(client, coordinator_headers, assignment, request_id=10**20)
    assert response.status_code == 404

    assert client.get(f"/api/v1/tasks/{10**20}", headers=coordinator_headers).status_code == 404


def test_cancelling_request_cancels_open_tasks(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]

    response = client.post(
        f"/api/v1/requests/{assignment['request']['id']}/cancel",
        headers=assignment["requester"]["headers"],
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "iptal edildi"

    cancelled = client.get(f"/api/v1/tasks/{task['id']}", headers=coordinator_headers).json()["data"]
    assert cancelled["status"] == "iptal edildi"
    assert cancelled["finished_at"] is not None
    vehicle = client.get(f"/api/v1/vehicles/{assignment['vehicle']['id']}", headers=coordinator_headers).json()["data"]
    assert vehicle["is_available"] is True


def test_deleting_request_releases_vehicle_but_keeps_finished_tasks(client: TestClient, coordinator_headers, assignment):
    task = _assign(client, coordinator_headers, assignment).json()["data"]
    client.put(f"/api/v1/tasks/{task['id']}/status", json={"status": "tamamlandı"}, headers=coordinator_headers)
    second_vehicle = client.post(
        "/api/v1/vehicles",
        json={"plate": f"46 AFT {task['id']:05d}", "vehicle_type": "kamyon", "capacity": 8},
        headers=assignment["owner"]["headers"],
    ).json()["data"]
    reopened = client.put(
        f"/api/v1/requests/{assignment['request']['id']}/status",
        json={"status": "gorevlendirildi"},
        headers=coordinator_headers,
    )
    assert reopened.status_code == 200
    open_task = _assign(client, coordinator_headers, assignment, vehicle_id=second_vehicle["id"]).json()["data"]

    response = client.delete(f"/api/v1/requests/{assignment['request']['id']}", headers=coordinator_headers)
    assert response.status_code == 200

    finished = client.get(f"/api/v1/tasks/{task['id']}", headers=coordinator_headers).json()["data"]
    assert finished["status"] == "tamamlandı"
    cancelled = client.get(f"/api/v1/tasks/{open_task['id']}", headers=coordinator_headers).json()["data"]
    assert cancelled["status"] == "iptal edildi"
    vehicle = client.get(f"/api/v1/vehicles/{second_vehicle['id']}", headers=coordinator_headers).json()["data"]
    assert vehicle["is_available"] is True
