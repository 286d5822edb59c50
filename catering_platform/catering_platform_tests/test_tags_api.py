"""Tests for the tag endpoints."""


def test_tag_crud(client, auth_headers):
    created = client.post("/tags", json={"name": "Wedding"}, headers=auth_headers)
    assert created.status_code == 201
    tag = created.json()

    renamed = client.put(f"/tags/{tag['id']}", json={"name": "Weddings"}, headers=auth_headers)
    assert renamed.status_code == 200
    assert renamed.json() == {"id": tag["id"], "name": "Weddings"}

    same_name = client.put(f"/tags/{tag['id']}", json={"name": "Weddings"}, headers=auth_headers)
    assert same_name.status_code == 200

    assert client.delete(f"/tags/{tag['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/tags/{tag['id']}", headers=auth_headers).status_code == 404


def test_duplicate_name_is_rejected(client, auth_headers):
    client.post("/tags", json={"name": "Wedding"}, headers=auth_headers)
    other = client.post("/tags", json={"name": "Party"}, headers=auth_headers).json()

    dup = client.post("/tags", json={"name": "Wedding"}, headers=auth_headers)
    assert dup.status_code == 400
    assert dup.json()["error_code"] == "DUPLICATE_RESOURCE"

    rename = client.put(f"/tags/{other['id']}", json={"name": "Wedding"}, headers=auth_headers)
    assert rename.status_code == 400


def test_names_differing_in_case_are_distinct(client, auth_headers):
    assert client.post("/tags", json={"name": "Wedding"}, headers=auth_headers).status_code == 201
    assert client.post("/tags", json={"name": "wedding"}, headers=auth_headers).status_code == 201


def test_name_is_required(client, auth_headers):
    for payload in ({}, {"name": ""}, {"name": "   "}, {"name": "x" * 256}):
        resp = client.post("/tags", json=payload, headers=auth_headers)
        assert resp.status_code == 400, payload


def test_tag_in_use_cannot_be_deleted(client, auth_headers, create_location, create_facility):
    create_location()
    facility = create_facility("Hall", 1, tag_names=["Wedding"])
    tag_id = facility["tags"][0]["id"]

    resp = client.delete(f"/tags/{tag_id}", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error_code"] == "RESOURCE_IN_USE"


def test_page_past_the_end_is_rejected(client, auth_headers):
    for name in ("Wedding", "Party", "Jazz"):
        client.post("/tags", json={"name": name}, headers=auth_headers)

    resp = client.get("/tags", params={"page": 3, "per_page": 2}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["details"] == {"page": "The requested page (3) exceeds the total number of pages (2)."}

    last = client.get("/tags", params={"page": 2, "per_page": 2}, headers=auth_headers)
    assert [tag["name"] for tag in last.json()["tags"]] == ["Jazz"]
