"""机构接口的集成测试用例。"""

from fastapi.testclient import TestClient

from conftest import next_sequence


def test_get_organizations_is_public(client: TestClient, organization_id):
    """匿名请求也能获取机构列表。"""
    client.cookies.clear()
    response = client.get("/api/v1/organizations")

    assert response.status_code == 200
    payload = response.json()
    assert payload["code"] == 200
    assert payload["msg"] == "获取机构列表成功"
    assert organization_id in [org["id"] for org in payload["data"]]


def test_create_organization_with_contact(client: TestClient, coordinator_headers):
    name = f"Kızılay Şube {next_sequence()}"
    response = client.post(
        "/api/v1/organizations",
        json={"name": name, "org_type": "özel", "contact": {"phone": "03124300000", "email": "info@kizilay.org"}},
        headers=coordinator_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == name
    assert data["org_type"] == "özel"
    assert data["contact"] == {"phone": "03124300000", "email": "info@kizilay.org", "address": None}


def test_create_organization_requires_name_and_known_type(client: TestClient, coordinator_headers):
    missing = client.post("/api/v1/organizations", json={}, headers=coordinator_headers)
    assert missing.status_code == 422
    assert missing.json()["data"]["field_errors"] == {"name": "该字段为必填项"}

    wrong_type = client.post(
        "/api/v1/organizations",
        json={"name": "Belediye", "org_type": "vakıf"},
        headers=coordinator_headers,
    )
    assert wrong_type.status_code == 422
    assert wrong_type.json()["data"]["field_errors"] == {"org_type": "取值不在允许范围内"}


def test_update_organization_merges_contact(client: TestClient, coordinator_headers, organization_id):
    client.put(
        f"/api/v1/organizations/{organization_id}",
        json={"contact": {"phone": "02122222222"}},
        headers=coordinator_headers,
    )
    response = client.put(
        f"/api/v1/organizations/{organization_id}",
        json={"contact": {"address": "Ankara"}},
        headers=coordinator_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["contact"]["phone"] == "02122222222"
    assert data["contact"]["address"] == "Ankara"
    assert data["org_type"] == "kamu"


def test_organization_writes_require_coordinator(client: TestClient, make_user, organization_id):
    owner = make_user(role="arac_sahibi")
    response = client.post("/api/v1/organizations", json={"name": "Yetkisiz"}, headers=owner["headers"])
    assert response.status_code == 403

    response = client.delete(f"/api/v1/organizations/{organization_id}", headers=owner["headers"])
    assert response.status_code == 403


def test_delete_organization_hides_it(client: TestClient, coordinator_headers, organization_id):
    response = client.delete(f"/api/v1/organizations/{organization_id}", headers=coordinator_headers)
    assert response.status_code == 200

    listed = client.get("/api/v1/organizations").json()["data"]
    assert organization_id not in [org["id"] for org in listed]
    assert client.get(f"/api/v1/organizations/{organization_id}").status_code == 404
