"""选项表与健康检查接口的测试用例。"""

from fastapi.testclient import TestClient

from app.core.enums import ENUM_TABLES, VehicleTypeEnum


def test_options_expose_every_enum_table(client: TestClient):
    response = client.get("/api/v1/options")

    assert response.status_code == 200
    data = response.json()["data"]
    assert set(data) == set(ENUM_TABLES)
    assert [item["value"] for item in data["vehicle_types"]] == [member.value for member in VehicleTypeEnum]
    assert {"value": "koordinator", "label": "coordinator"} in data["roles"]


def test_single_option_table(client: TestClient):
    response = client.get("/api/v1/options/task_statuses")
    assert response.status_code == 200
    assert [item["value"] for item in response.json()["data"]] == ["beklemede", "başladı", "tamamlandı", "iptal edildi"]

    assert client.get("/api/v1/options/bilinmeyen").status_code == 404


def test_health_check_echoes_request_id(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.status_code == 200
    assert response.json() == {"msg": "OK", "data": {"status": "healthy"}, "code": 200}
    assert response.headers["x-request-id"] == "req-123"
