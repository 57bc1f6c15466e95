"""通知接口的集成测试用例。"""

from fastapi.testclient import TestClient


def test_send_individual_notification_with_defaults(client: TestClient, coordinator_headers, make_user):
    user = make_user()
    response = client.post(
        "/api/v1/notifications",
        json={"user_id": user["id"], "title": "Hoş geldiniz", "content": "Hesabınız onay bekliyor"},
        headers=coordinator_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["type"] == "sistem"
    assert data["visibility"] == "bireysel"
    assert data["is_read"] is False

    listed = client.get("/api/v1/notifications", headers=user["headers"]).json()["data"]
    assert listed["unread_count"] == 1
    assert listed["items"][0]["id"] == data["id"]


def test_send_notification_validation(client: TestClient, coordinator_headers, make_user):
    user = make_user()
    empty = client.post("/api/v1/notifications", json={"user_id": user["id"]}, headers=coordinator_headers)
    assert empty.status_code == 422
    assert empty.json()["data"]["field_errors"] == {"title": "该字段为必填项", "content": "该字段为必填项"}

    no_target = client.post(
        "/api/v1/notifications",
        json={"title": "Duyuru", "content": "Metin"},
        headers=coordinator_headers,
    )
    assert no_target.status_code == 400

    wrong_type = client.post(
        "/api/v1/notifications",
        json={"user_id": user["id"], "title": "Duyuru", "content": "Metin", "type": "reklam"},
        headers=coordinator_headers,
    )
    assert wrong_type.status_code == 422
    assert wrong_type.json()["data"]["field_errors"] == {"type": "取值不在允许范围内"}


def test_only_coordinator_sends(client: TestClient, make_user):
    user = make_user(role="talep_eden")
    response = client.post(
        "/api/v1/notifications",
        json={"user_id": user["id"], "title": "X", "content": "Y"},
        headers=user["headers"],
    )
    assert response.status_code == 403


def test_organizational_notification_reaches_members(client: TestClient, coordinator_headers, make_user, organization_id):
    member = make_user(role="talep_eden", organization_id=organization_id)
    outsider = make_user(role="talep_eden")

    sent = client.post(
        "/api/v1/notifications",
        json={"organization_id": organization_id, "title": "Kurum duyurusu", "content": "Toplantı", "visibility": "kurumsal"},
        headers=coordinator_headers,
    ).json()["data"]

    member_ids = [item["id"] for item in client.get("/api/v1/notifications", headers=member["headers"]).json()["data"]["items"]]
    outsider_ids = [item["id"] for item in client.get("/api/v1/notifications", headers=outsider["headers"]).json()["data"]["items"]]
    assert sent["id"] in member_ids
    assert sent["id"] not in outsider_ids


def test_mark_read_and_read_all(client: TestClient, coordinator_headers, make_user):
    user = make_user()
    ids = []
    for index in range(3):
        response = client.post(
            "/api/v1/notifications",
            json={"user_id": user["id"], "title": f"Bildirim {index}", "content": "..."},
            headers=coordinator_headers,
        )
        ids.append(response.json()["data"]["id"])

    marked = client.put(f"/api/v1/notifications/{ids[0]}/read", headers=user["headers"])
    assert marked.status_code == 200
    assert marked.json()["data"]["is_read"] is True

    unread = client.get("/api/v1/notifications", params={"unread_only": True}, headers=user["headers"]).json()["data"]
    assert sorted(item["id"] for item in unread["items"]) == sorted(ids[1:])

    read_all = client.put("/api/v1/notifications/read-all", headers=user["headers"])
    assert read_all.json()["data"] == {"updated": 2}
    assert client.get("/api/v1/notifications", headers=user["headers"]).json()["data"]["unread_count"] == 0


def test_cannot_read_or_delete_foreign_notification(client: TestClient, coordinator_headers, make_user):
    owner = make_user()
    other = make_user()
    sent = client.post(
        "/api/v1/notifications",
        json={"user_id": owner["id"], "title": "Özel", "content": "..."},
        headers=coordinator_headers,
    ).json()["data"]

    assert client.put(f"/api/v1/notifications/{sent['id']}/read", headers=other["headers"]).status_code == 404
    assert client.delete(f"/api/v1/notifications/{sent['id']}", headers=other["headers"]).status_code == 404

    assert client.delete(f"/api/v1/notifications/{sent['id']}", headers=owner["headers"]).status_code == 200
    remaining = client.get("/api/v1/notifications", headers=owner["headers"]).json()["data"]["items"]
    assert sent["id"] not in [item["id"] for item in remaining]
