"""车辆需求接口的集成测试用例。"""

from fastapi.testclient import TestClient


def test_requester_creates_request(client: TestClient, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(
        requester["headers"],
        vehicles=[{"vehicle_type": "otobüs", "count": 2}, {"vehicle_type": "otobüs", "count": 1}],
    )

    assert request["status"] == "beklemede"
    assert request["requester_id"] == requester["id"]
    assert request["requester_organization_id"] == organization_id
    assert request["vehicles"] == [
        {"vehicle_type": "otobüs", "count": 2},
        {"vehicle_type": "otobüs", "count": 1},
    ]


def test_status_in_create_payload_is_ignored(client: TestClient, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"], status="tamamlandı")
    assert request["status"] == "beklemede"


def test_create_request_requires_line_items(client: TestClient, make_user, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    response = client.post(
        "/api/v1/requests",
        json={
            "title": "Boş",
            "description": "Araç listesi yok",
            "vehicles": [],
            "location": {"address": "Adıyaman", "lat": 37.76, "lng": 38.27},
        },
        headers=requester["headers"],
    )
    assert response.status_code == 422
    assert "vehicles" in response.json()["data"]["field_errors"]


def test_create_request_reports_nested_errors(client: TestClient, make_user, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    response = client.post(
        "/api/v1/requests",
        json={"vehicles": [{"vehicle_type": "otomobil", "count": 0}]},
        headers=requester["headers"],
    )

    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {
        "title": "该字段为必填项",
        "description": "该字段为必填项",
        "vehicles.0.count": "数值过小",
        "location.address": "该字段为必填项",
        "location.lat": "该字段为必填项",
        "location.lng": "该字段为必填项",
    }


def test_requester_without_organization_gets_field_error(client: TestClient, make_user):
    requester = make_user(role="talep_eden")
    response = client.post(
        "/api/v1/requests",
        json={
            "title": "Gıda",
            "description": "Kumanya dağıtımı",
            "vehicles": [{"vehicle_type": "kamyon", "count": 1}],
            "location": {"address": "Nurdağı", "lat": 37.17, "lng": 36.73},
        },
        headers=requester["headers"],
    )
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {"requester_organization_id": "该字段为必填项"}


def test_only_requesters_create_requests(client: TestClient, make_user):
    owner = make_user(role="arac_sahibi")
    response = client.post("/api/v1/requests", json={"vehicles": [{"vehicle_type": "kamyon", "count": 1}]}, headers=owner["headers"])
    assert response.status_code == 403


def test_list_mine_and_coordinator_listing(client: TestClient, coordinator_headers, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"])

    mine = client.get("/api/v1/requests/mine", headers=requester["headers"]).json()["data"]
    assert [item["id"] for item in mine] == [request["id"]]

    listed = client.get(
        "/api/v1/requests",
        params={"status": "beklemede", "page_size": 200},
        headers=coordinator_headers,
    ).json()["data"]
    assert all(item["status"] == "beklemede" for item in listed["items"])

    assert client.get("/api/v1/requests", headers=requester["headers"]).status_code == 403


def test_coordinator_changes_status_without_transition_guard(client: TestClient, coordinator_headers, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"])

    response = client.put(
        f"/api/v1/requests/{request['id']}/status",
        json={"status": "tamamlandı"},
        headers=coordinator_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "tamamlandı"

    notifications = client.get("/api/v1/notifications", headers=requester["headers"]).json()["data"]["items"]
    assert notifications[0]["type"] == "talep"
    assert notifications[0]["target_url"] == f"/requests/{request['id']}"


def test_invalid_request_status_is_rejected(client: TestClient, coordinator_headers, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"])

    response = client.put(
        f"/api/v1/requests/{request['id']}/status",
        json={"status": "başladı"},
        headers=coordinator_headers,
    )
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {"status": "取值不在允许范围内"}


def test_requester_cancels_own_request(client: TestClient, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    stranger = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"])

    assert client.post(f"/api/v1/requests/{request['id']}/cancel", headers=stranger["headers"]).status_code == 403

    response = client.post(f"/api/v1/requests/{request['id']}/cancel", headers=requester["headers"])
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "iptal edildi"

    again = client.post(f"/api/v1/requests/{request['id']}/cancel", headers=requester["headers"])
    assert again.status_code == 400


def test_request_detail_and_delete(client: TestClient, coordinator_headers, make_user, make_request, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    request = make_request(requester["headers"])

    detail = client.get(f"/api/v1/requests/{request['id']}", headers=coordinator_headers)
    assert detail.status_code == 200
    assert detail.json()["data"]["tasks"] == []

    assert client.delete(f"/api/v1/requests/{request['id']}", headers=requester["headers"]).status_code == 200
    missing = client.get(f"/api/v1/requests/{request['id']}", headers=coordinator_headers)
    assert missing.status_code == 404
    assert missing.json()["msg"] == "需求不存在或已删除"


def test_out_of_range_organization_reference_is_rejected(client: TestClient, make_user, organization_id):
    requester = make_user(role="talep_eden", organization_id=organization_id)
    response = client.post(
        "/api/v1/requests",
        json={
            "title": "Su",
            "description": "İçme suyu dağıtımı",
            "requester_organization_id": 10**20,
            "vehicles": [{"vehicle_type": "tanker", "count": 1}],
            "location": {"address": "İslahiye", "lat": 37.02, "lng": 36.63},
        },
        headers=requester["headers"],
    )
    assert response.status_code == 422
    assert response.json()["data"]["field_errors"] == {"requester_organization_id": "无效的引用标识"}
