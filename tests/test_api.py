from __future__ import annotations

from fastapi.testclient import TestClient

from main import app


client = TestClient(app)

ALICE = [{"personName": "Alice", "drugs": [{"name": "Vitamin", "time": "08:00", "comment": "", "status": False}]}]


def test_liveness_probe() -> None:
    for method in ("get", "post"):
        response = getattr(client, method)("/api/v1")
        assert response.status_code == 200
        assert response.text == "OK"


def test_settings_round_trip(store_path, read_store) -> None:
    payload = [
        {"personName": "Alice", "drugs": [{"name": "Vitamin", "time": "08:00", "comment": "with food", "status": False}]},
        {"personName": "Bob", "drugs": []},
    ]

    response = client.post("/api/v1/drugs/settings", json=payload)
    assert response.status_code == 200
    assert response.content == b""
    assert read_store() == payload

    response = client.get("/api/v1/drugs/settings")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == payload


def test_due_drugs_scenario(store_path, write_store, clock) -> None:
    write_store(ALICE)
    clock.set(9, 0)

    response = client.get("/api/v1/drugs")
    assert response.status_code == 200
    assert response.json() == ALICE

    response = client.put("/api/v1/drugs/Alice/Vitamin")
    assert response.status_code == 200
    assert response.content == b""

    response = client.get("/api/v1/drugs")
    assert response.status_code == 200
    assert response.json() == []


def test_new_day_resets_taken_drugs(store_path, write_store, read_store, clock) -> None:
    write_store(
        [
            {"personName": "Alice", "drugs": [{"name": "Vitamin", "time": "08:00", "comment": "", "status": True}]},
            {"personName": "Bob", "drugs": [{"name": "Iron", "time": "10:00", "comment": "", "status": True}]},
        ]
    )
    clock.set(7, 0)

    response = client.get("/api/v1/drugs")
    assert response.status_code == 200
    assert response.json() == []
    assert [d["status"] for p in read_store() for d in p["drugs"]] == [False, False]

    clock.set(8, 30)
    response = client.get("/api/v1/drugs")
    assert [p["personName"] for p in response.json()] == ["Alice"]


def test_settings_are_not_reset(store_path, write_store, read_store, clock) -> None:
    taken = [{"personName": "Alice", "drugs": [{"name": "Vitamin", "time": "08:00", "comment": "", "status": True}]}]
    write_store(taken)
    clock.set(7, 0)

    assert client.get("/api/v1/drugs/settings").json() == taken
    assert read_store() == taken


def test_malformed_time_is_reported_per_request(store_path, write_store, clock) -> None:
    write_store([{"personName": "Alice", "drugs": [{"name": "Vitamin", "time": "8", "comment": "", "status": False}]}])

    response = client.get("/api/v1/drugs")
    assert response.status_code == 400
    assert "invalid time '8'" in response.json()["detail"]

    # the server keeps serving
    assert client.get("/api/v1").text == "OK"


def test_posting_malformed_time_is_rejected(store_path, write_store, read_store) -> None:
    write_store(ALICE)
    payload = [{"personName": "Bob", "drugs": [{"name": "Iron", "time": "9.30", "comment": "", "status": False}]}]

    response = client.post("/api/v1/drugs/settings", json=payload)

    assert response.status_code == 400
    assert read_store() == ALICE


def test_posting_duplicate_people_is_rejected(store_path) -> None:
    payload = [{"personName": "Alice", "drugs": []}, {"personName": "Alice", "drugs": []}]

    response = client.post("/api/v1/drugs/settings", json=payload)

    assert response.status_code == 400
    assert "duplicate person names: Alice" in response.json()["detail"]
    assert not store_path.exists()


def test_posting_invalid_body_is_rejected(store_path) -> None:
    response = client.post("/api/v1/drugs/settings", json={"personName": "Alice"})
    assert response.status_code == 422


def test_marking_unknown_person_is_not_found(store_path, write_store, read_store) -> None:
    write_store(ALICE)

    response = client.put("/api/v1/drugs/Dave/Vitamin")

    assert response.status_code == 404
    assert read_store() == ALICE


def test_marking_unknown_drug_leaves_document_unchanged(store_path, write_store, read_store) -> None:
    write_store(ALICE)

    response = client.put("/api/v1/drugs/Alice/Iron")

    assert response.status_code == 200
    assert read_store() == ALICE


def test_missing_store_is_a_server_error(store_path) -> None:
    for response in (
        client.get("/api/v1/drugs"),
        client.get("/api/v1/drugs/settings"),
        client.put("/api/v1/drugs/Alice/Vitamin"),
    ):
        assert response.status_code == 500
        assert "cannot read settings file" in response.json()["detail"]


def test_people_without_drug_list_are_served(store_path, write_store, clock) -> None:
    write_store([{"personName": "Bob", "drugs": None}] + ALICE)

    response = client.get("/api/v1/drugs/settings")
    assert response.status_code == 200
    assert response.json() == [{"personName": "Bob", "drugs": []}] + ALICE

    response = client.get("/api/v1/drugs")
    assert response.status_code == 200
    assert response.json() == ALICE
