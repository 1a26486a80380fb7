from fastapi.testclient import TestClient

from backend.app.main import app

client = TestClient(app)

SYSTEM_3X3 = [[2, 1, 3, 1], [3, 2, 1, 4], [1, -1, 2, 3]]


def test_solve_endpoint() -> None:
    response = client.post("/api/solve", json={"matrix": SYSTEM_3X3, "method": "gaussian"})
    assert response.status_code == 200
    body = response.json()
    assert body["final_answer"] == "x1 = 3\nx2 = -2\nx3 = -1"
    assert body["steps"][0]["matrix"][0] == ["2", "1", "3", "1"]
    assert body["summary"]["classification"] == "unique"


def test_solve_rejects_bad_input() -> None:
    assert client.post("/api/solve", json={"matrix": []}).status_code == 400
    response = client.post("/api/solve", json={"matrix": SYSTEM_3X3, "method": "qr"})
    assert response.status_code == 400
    assert "Unknown method" in response.json()["detail"]


def test_size_limit() -> None:
    big = [[1] * 7 for _ in range(6)]
    response = client.post("/api/solve", json={"matrix": big})
    assert response.status_code == 400
    assert "too large" in response.json()["detail"]


def test_eliminate_endpoint() -> None:
    response = client.post("/api/eliminate", json={"matrix": [[1, 1, 2], [0, 0, 5]]})
    assert response.status_code == 200
    body = response.json()
    assert body["result"] == [["1", "1", "2"], ["0", "0", "5"]]
    assert body["steps"][0]["operation"] == "Initial"


def test_classify_endpoint() -> None:
    body = client.post("/api/classify", json={"matrix": [[1, 1, 2], [1, 1, 2]]}).json()
    assert body == {"classification": "infinite", "free_variables": [1]}


def test_determinant_and_inverse_endpoints() -> None:
    body = client.post("/api/determinant", json={"matrix": [[1, 2], [3, 4]]}).json()
    assert body == {"determinant": "-2", "decimal": -2.0}

    body = client.post("/api/inverse", json={"matrix": [[4, 7], [2, 6]]}).json()
    assert body["result"] == [["3/5", "-7/10"], ["-1/5", "2/5"]]

    response = client.post("/api/inverse", json={"matrix": [[1, 2], [2, 4]]})
    assert response.status_code == 400
    assert "singular" in response.json()["detail"]


def test_ragged_rows_are_rejected() -> None:
    for path in ("/api/solve", "/api/eliminate", "/api/classify", "/api/determinant"):
        response = client.post(path, json={"matrix": [[1, 2, 3], [4, 5]]})
        assert response.status_code == 400
        assert "same number of entries" in response.json()["detail"]
