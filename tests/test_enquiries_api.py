from estatehub.models import Enquiry
from estatehub.models.enums import AgencyStatus, UserRole

from support import auth


def enquiry_form(property_id, **overrides):
    return {
        "name": "Jane Buyer",
        "email": "jane@example.com",
        "phone": "+44 20 7946 0000",
        "message": "Could I arrange a viewing this weekend?",
        "propertyId": property_id,
        **overrides,
    }


def test_create_enquiry(client, db, make_agency, make_property):
    property_obj = make_property(make_agency())

    response = client.post("/api/enquiries", json=enquiry_form(property_obj.id))
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "NEW"
    assert body["source"] == "website"
    assert body["agencyId"] == property_obj.agency_id
    assert db.query(Enquiry).count() == 1


def test_create_enquiry_validation(client, make_agency, make_property):
    property_obj = make_property(make_agency())
    for overrides in ({"name": "J"}, {"email": "not-an-email"}, {"phone": "12"}, {"message": "Hi"}):
        response = client.post("/api/enquiries", json=enquiry_form(property_obj.id, **overrides))
        assert response.status_code == 422


def test_create_enquiry_unknown_property(client, db):
    response = client.post("/api/enquiries", json=enquiry_form(9999))
    assert response.status_code == 404


def test_create_enquiry_for_suspended_agency(client, make_agency, make_property):
    property_obj = make_property(make_agency(status=AgencyStatus.SUSPENDED.value))
    assert client.post("/api/enquiries", json=enquiry_form(property_obj.id)).status_code == 400


def test_list_enquiries_own_agency_newest_first(client, make_agency, make_user, make_property, make_enquiry):
    agency = make_agency("acme")
    first_property = make_property(agency)
    second_property = make_property(agency)
    older = make_enquiry(first_property)
    newer = make_enquiry(second_property, status="IN_PROGRESS")
    make_enquiry(make_property(make_agency("other")))
    user = make_user(agency)

    body = client.get("/api/enquiries", headers=auth(user)).json()
    assert [item["id"] for item in body["data"]] == [newer.id, older.id]
    assert body["pagination"]["total"] == 2
    assert body["data"][0]["property"]["id"] == second_property.id

    body = client.get("/api/enquiries", params={"status": "NEW"}, headers=auth(user)).json()
    assert [item["id"] for item in body["data"]] == [older.id]

    body = client.get("/api/enquiries", params={"propertyId": second_property.id}, headers=auth(user)).json()
    assert [item["id"] for item in body["data"]] == [newer.id]


def test_list_enquiries_paginated(client, make_agency, make_user, make_property, make_enquiry):
    agency = make_agency()
    property_obj = make_property(agency)
    for _ in range(3):
        make_enquiry(property_obj)
    user = make_user(agency)

    body = client.get("/api/enquiries", params={"page": 2, "limit": 2}, headers=auth(user)).json()
    assert len(body["data"]) == 1
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2, "hasMore": False}


def test_list_enquiries_requires_agency_user(client, make_user, db):
    assert client.get("/api/enquiries").status_code == 401
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)
    assert client.get("/api/enquiries", headers=auth(admin)).status_code == 401


def test_update_enquiry_sets_timestamps_on_transition(client, make_agency, make_user, make_property, make_enquiry):
    agency = make_agency()
    enquiry = make_enquiry(make_property(agency))
    user = make_user(agency)
    url = f"/api/enquiries/{enquiry.id}"

    body = client.put(url, json={"status": "RESPONDED", "internalNotes": "Called back"}, headers=auth(user)).json()
    assert body["status"] == "RESPONDED"
    assert body["internalNotes"] == "Called back"
    responded_at = body["respondedAt"]
    assert responded_at is not None
    assert body["closedAt"] is None

    body = client.put(url, json={"status": "RESPONDED"}, headers=auth(user)).json()
    assert body["respondedAt"] == responded_at
    assert body["internalNotes"] == "Called back"

    body = client.put(url, json={"status": "CLOSED"}, headers=auth(user)).json()
    assert body["closedAt"] is not None


def test_enquiry_of_other_agency_is_403(client, make_agency, make_user, make_property, make_enquiry):
    enquiry = make_enquiry(make_property(make_agency("acme")))
    stranger = make_user(make_agency("other"))

    assert client.get(f"/api/enquiries/{enquiry.id}", headers=auth(stranger)).status_code == 403
    assert client.put(f"/api/enquiries/{enquiry.id}", json={"status": "CLOSED"}, headers=auth(stranger)).status_code == 403
    assert client.delete(f"/api/enquiries/{enquiry.id}", headers=auth(stranger)).status_code == 403


def test_get_and_delete_enquiry(client, db, make_agency, make_user, make_property, make_enquiry):
    agency = make_agency()
    enquiry = make_enquiry(make_property(agency))
    user = make_user(agency)

    assert client.get(f"/api/enquiries/{enquiry.id}", headers=auth(user)).json()["id"] == enquiry.id
    assert client.delete(f"/api/enquiries/{enquiry.id}", headers=auth(user)).json() == {"success": True}
    assert client.get(f"/api/enquiries/{enquiry.id}", headers=auth(user)).status_code == 404
