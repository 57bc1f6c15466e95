"""端到端场景：协调员、车主、需求方协同完成一次用车需求。"""

from fastapi.testclient import TestClient


def test_end_to_end_request_flow(client: TestClient, coordinator_headers, make_user, organization_id):
    owner = make_user(role="arac_sahibi")
    requester = make_user(role="talep_eden", organization_id=organization_id)

    car = client.post(
        "/api/v1/vehicles",
        json={"plate": "80 E2E 001", "vehicle_type": "otomobil", "capacity": 5},
        headers=owner["headers"],
    ).json()["data"]
    van = client.post(
        "/api/v1/vehicles",
        json={"plate": "80 E2E 002", "vehicle_type": "kamyonet", "capacity": 10},
        headers=owner["headers"],
    ).json()["data"]
    assert (car["vehicle_type"], car["capacity"]) == ("otomobil", 5)
    assert (van["vehicle_type"], van["capacity"]) == ("kamyonet", 10)

    created = client.post(
        "/api/v1/requests",
        json={
            "title": "Osmaniye tahliye",
            "description": "Hasarlı binalardan tahliye",
            "vehicles": [
                {"vehicle_type": "otomobil", "count": 1},
                {"vehicle_type": "kamyonet", "count": 1},
            ],
            "location": {"address": "Osmaniye Merkez", "lat": 37.0742, "lng": 36.2478},
        },
        headers=requester["headers"],
    )
    assert created.status_code == 200
    request = created.json()["data"]
    assert request["status"] == "beklemede"

    fetched = client.get(f"/api/v1/requests/{request['id']}", headers=requester["headers"]).json()["data"]
    assert [(item["vehicle_type"], item["count"]) for item in fetched["vehicles"]] == [
        ("otomobil", 1),
        ("kamyonet", 1),
    ]
    assert fetched["location"] == {"address": "Osmaniye Merkez", "lat": 37.0742, "lng": 36.2478}

    task_ids = []
    for vehicle in (car, van):
        response = client.post(
            "/api/v1/tasks",
            json={
                "request_id": request["id"],
                "vehicle_id": vehicle["id"],
                "driver": {"name": "Ömer", "surname": "Aydın", "phone": "05079998877"},
                "target_location": {"lat": 37.0, "lng": 35.32},
            },
            headers=coordinator_headers,
        )
        assert response.status_code == 200
        task_ids.append(response.json()["data"]["id"])

    # 只完成一个任务时需求仍处于已分派
    client.put(f"/api/v1/tasks/{task_ids[0]}/status", json={"status": "tamamlandı"}, headers=owner["headers"])
    partial = client.get(f"/api/v1/requests/{request['id']}", headers=requester["headers"]).json()["data"]
    assert partial["status"] == "gorevlendirildi"

    client.put(f"/api/v1/tasks/{task_ids[1]}/status", json={"status": "tamamlandı"}, headers=owner["headers"])
    finished = client.get(f"/api/v1/requests/{request['id']}", headers=requester["headers"]).json()["data"]
    assert finished["status"] == "tamamlandı"
    assert {task["status"] for task in finished["tasks"]} == {"tamamlandı"}
