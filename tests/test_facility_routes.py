import json

import pytest


def test_save_then_get(client, store):
    response = client.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"name": "Cafe A"}})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert json.loads(store._data["f1"]) == {"name": "Cafe A"}

    response = client.get("/facilities/get", params={"key": "f1"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"name": "Cafe A"}}


@pytest.mark.parametrize(
    "value",
    [
        {"name": "カフェ", "tags": ["wifi", "quiet"], "rating": 4.5, "open": True},
        [1, 2, {"nested": None}],
        "plain string",
        0,
        False,
    ],
)
def test_saved_value_reads_back_equal(client, value):
    client.post("/facilities/save", json={"facilityKey": "k", "facilityData": value})

    response = client.get("/facilities/get", params={"key": "k"})

    assert response.json()["data"] == value


def test_save_overwrites(client):
    client.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"v": 1}})
    client.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"v": 2}})

    response = client.get("/facilities/get", params={"key": "f1"})

    assert response.json()["data"] == {"v": 2}


@pytest.mark.parametrize(
    "body",
    [
        {"facilityData": {"name": "Cafe A"}},
        {"facilityKey": "f1"},
        {"facilityKey": "", "facilityData": {}},
        {"facilityKey": "f1", "facilityData": None},
        [],
    ],
)
def test_save_rejects_incomplete_body(client, store, body):
    response = client.post("/facilities/save", json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert store._data == {}


def test_save_rejects_malformed_json(client):
    response = client.post(
        "/facilities/save",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be valid JSON"


def test_save_without_store_still_succeeds(client_without_store):
    response = client_without_store.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"a": 1}})

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_get_requires_key(client):
    response = client.get("/facilities/get")
    assert response.status_code == 400
    assert "error" in response.json()


def test_get_missing_key_returns_null(client):
    response = client.get("/facilities/get", params={"key": "missing"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None}


def test_get_without_store_returns_null(client_without_store):
    response = client_without_store.get("/facilities/get", params={"key": "f1"})

    assert response.json() == {"success": True, "data": None}


def test_get_all(client):
    client.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"name": "Cafe A"}})
    client.post("/facilities/save", json={"facilityKey": "f2", "facilityData": {"name": "Cafe B"}})

    response = client.get("/facilities/get-all")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {"f1": {"name": "Cafe A"}, "f2": {"name": "Cafe B"}},
    }


def test_get_all_empty_store(client):
    response = client.get("/facilities/get-all")
    assert response.json() == {"success": True, "data": {}}


def test_get_all_without_store(client_without_store):
    response = client_without_store.get("/facilities/get-all")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}


def test_facility_routes_never_call_upstream(client, upstream):
    client.post("/facilities/save", json={"facilityKey": "f1", "facilityData": {"a": 1}})
    client.get("/facilities/get", params={"key": "f1"})
    client.get("/facilities/get-all")

    assert upstream.requests == []


@pytest.mark.parametrize("constant", [b"NaN", b"Infinity", b"-Infinity"])
def test_save_rejects_non_finite_numbers(client, store, constant):
    response = client.post(
        "/facilities/save",
        content=b'{"facilityKey": "bad", "facilityData": {"rating": ' + constant + b"}}",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "facilityData must be valid JSON"
    assert store._data == {}


def test_save_rejects_non_finite_numbers_without_store(client_without_store):
    response = client_without_store.post(
        "/facilities/save",
        content=b'{"facilityKey": "bad", "facilityData": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400


def test_get_all_skips_stored_non_finite_values(client, store):
    store._data["bad"] = '{"rating": NaN}'
    client.post("/facilities/save", json={"facilityKey": "good", "facilityData": {"name": "Cafe A"}})

    response = client.get("/facilities/get-all")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"good": {"name": "Cafe A"}}}


def test_get_stored_non_finite_value_is_a_load_failure(client, store):
    store._data["bad"] = "Infinity"

    response = client.get("/facilities/get", params={"key": "bad"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to load facility data"
