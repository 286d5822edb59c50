"""Tests for the employee endpoints."""
import pytest


@pytest.fixture
def facilities(create_location, create_facility):
    create_location("Rotterdam")
    create_location("Utrecht")
    return [create_facility("Hall", 1), create_facility("Barn", 2)]


def test_employee_crud(client, auth_headers, facilities):
    resp = client.post(
        "/employees",
        json={
            "name": "Anna de Vries",
            "email": "anna@example.com",
            "phone": "+31 6 1234 5678",
            "address": "Main St 1",
            "facilityIds": [facilities[0]["id"]],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    employee = resp.json()
    assert employee["phone"] == "+31612345678"
    assert employee["facilities"] == [{"id": facilities[0]["id"], "name": "Hall"}]

    updated = client.patch(
        f"/employees/{employee['id']}",
        json={"facilityIds": [facilities[1]["id"]]},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert [f["name"] for f in updated.json()["facilities"]] == ["Barn"]
    assert updated.json()["email"] == "anna@example.com"

    deleted = client.delete(f"/employees/{employee['id']}", headers=auth_headers)
    assert deleted.json() == {"message": f"Employee with ID {employee['id']} successfully deleted."}
    assert client.get(f"/employees/{employee['id']}", headers=auth_headers).status_code == 404


def test_invalid_email_and_phone(client, auth_headers):
    bad_email = client.post("/employees", json={"name": "A", "email": "not-an-email"}, headers=auth_headers)
    assert bad_email.status_code == 400
    assert bad_email.json()["details"]["email"] == "Invalid email format"

    bad_phone = client.post(
        "/employees", json={"name": "A", "email": "a@example.com", "phone": "12"}, headers=auth_headers
    )
    assert bad_phone.status_code == 400
    assert "phone" in bad_phone.json()["details"]


def test_duplicate_email(client, auth_headers):
    client.post("/employees", json={"name": "A", "email": "a@example.com"}, headers=auth_headers)
    other = client.post("/employees", json={"name": "B", "email": "b@example.com"}, headers=auth_headers).json()

    dup = client.post("/employees", json={"name": "C", "email": "a@example.com"}, headers=auth_headers)
    assert dup.status_code == 400
    assert dup.json()["error_code"] == "DUPLICATE_RESOURCE"

    steal = client.put(f"/employees/{other['id']}", json={"email": "a@example.com"}, headers=auth_headers)
    assert steal.status_code == 400

    keep = client.put(f"/employees/{other['id']}", json={"email": "b@example.com"}, headers=auth_headers)
    assert keep.status_code == 200


def test_unknown_facility_is_rejected(client, auth_headers):
    resp = client.post(
        "/employees", json={"name": "A", "email": "a@example.com", "facilityIds": [3]}, headers=auth_headers
    )
    assert resp.status_code == 404
    assert client.get("/employees", headers=auth_headers).json()["employees"] == []


def test_search_employees(client, auth_headers, facilities):
    client.post("/employees", json={"name": "Anna", "email": "anna@example.com",
                                    "facilityIds": [facilities[0]["id"]]}, headers=auth_headers)
    client.post("/employees", json={"name": "Bram", "email": "bram@example.org",
                                    "facilityIds": [facilities[0]["id"], facilities[1]["id"]]}, headers=auth_headers)
    client.post("/employees", json={"name": "Cees", "email": "cees@example.org"}, headers=auth_headers)

    def names(params):
        resp = client.get("/employees", params=params, headers=auth_headers)
        assert resp.status_code == 200, resp.text
        return [e["name"] for e in resp.json()["employees"]]

    assert names({"query": "example.org"}) == ["Bram", "Cees"]
    assert names({"query": "utrecht", "filter": "city"}) == ["Bram"]
    assert names({"query": "hall", "filter": "facility_name"}) == ["Anna", "Bram"]
    assert names({"query": "hall"}) == []
    assert client.get("/employees", params={"query": "x", "filter": "salary"},
                      headers=auth_headers).status_code == 400


def test_deleting_facility_drops_assignments(client, auth_headers, facilities):
    employee = client.post("/employees", json={"name": "Anna", "email": "anna@example.com",
                                               "facilityIds": [facilities[0]["id"]]}, headers=auth_headers).json()

    assert client.delete(f"/facilities/{facilities[0]['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/employees/{employee['id']}", headers=auth_headers).json()["facilities"] == []


def test_per_field_filters(client, auth_headers, facilities):
    client.post("/employees", json={"name": "Anna", "email": "anna@example.com",
                                    "facilityIds": [facilities[0]["id"]]}, headers=auth_headers)
    client.post("/employees", json={"name": "Bram", "email": "bram@example.org",
                                    "facilityIds": [facilities[0]["id"], facilities[1]["id"]]}, headers=auth_headers)
    client.post("/employees", json={"name": "Cees", "email": "cees@example.org"}, headers=auth_headers)

    def names(params):
        resp = client.get("/employees", params=params, headers=auth_headers)
        assert resp.status_code == 200, resp.text
        return [e["name"] for e in resp.json()["employees"]]

    assert names({"email": "example.org", "city": "utrecht"}) == ["Bram"]
    assert names({"email": "example.org", "city": "utrecht", "operator": "OR"}) == ["Bram", "Cees"]
    assert names({"query": "anna", "facility_name": "hall"}) == ["Anna"]
    assert names({"employee_name": "cees"}) == ["Cees"]
    assert names({"email": ""}) == ["Anna", "Bram", "Cees"]


def test_blank_email_on_update_is_ignored(client, auth_headers):
    employee = client.post("/employees", json={"name": "Anna", "email": "anna@example.com"},
                           headers=auth_headers).json()

    renamed = client.patch(f"/employees/{employee['id']}", json={"name": "Anne", "email": "  "}, headers=auth_headers)
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Anne"
    assert renamed.json()["email"] == "anna@example.com"

    only_blank = client.patch(f"/employees/{employee['id']}", json={"email": ""}, headers=auth_headers)
    assert only_blank.status_code == 400
    assert only_blank.json()["error_code"] == "INVALID_OPERATION"


def test_page_past_the_end_is_rejected(client, auth_headers):
    client.post("/employees", json={"name": "Anna", "email": "anna@example.com"}, headers=auth_headers)

    resp = client.get("/employees", params={"page": 2}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["details"] == {"page": "The requested page (2) exceeds the total number of pages (1)."}
