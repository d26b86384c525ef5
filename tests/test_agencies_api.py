from estatehub.models import Agency, Property, User
from estatehub.models.enums import AgencyStatus, UserRole
from estatehub.services.passwords import verify_password

from support import auth

AGENCY_FORM = {
    "name": "Harbour Homes",
    "slug": "harbour-homes",
    "email": "hello@harbourhomes.co.uk",
    "adminEmail": "owner@harbourhomes.co.uk",
    "adminName": "Sam Owner",
    "adminPassword": "correct-horse",
    "maxProperties": 25,
}


def test_create_agency_with_admin(client, db, make_user):
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)

    response = client.post("/api/agencies", json=AGENCY_FORM, headers=auth(admin))
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "ACTIVE"
    assert body["maxProperties"] == 25
    assert body["maxUsers"] == 5
    assert body["counts"] == {"properties": 0, "users": 1, "enquiries": 0}

    owner = db.query(User).filter(User.email == "owner@harbourhomes.co.uk").one()
    assert owner.role == UserRole.AGENCY_ADMIN.value
    assert owner.agency_id == body["id"]
    assert owner.password_hash != "correct-horse"
    assert verify_password("correct-horse", owner.password_hash)


def test_create_agency_duplicates_are_400(client, make_agency, make_user):
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value, email="root@example.com")
    make_agency("harbour-homes")

    assert client.post("/api/agencies", json=AGENCY_FORM, headers=auth(admin)).status_code == 400

    form = {**AGENCY_FORM, "slug": "harbour-two", "adminEmail": "root@example.com"}
    assert client.post("/api/agencies", json=form, headers=auth(admin)).status_code == 400


def test_create_agency_invalid_slug(client, make_user):
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)
    form = {**AGENCY_FORM, "slug": "Harbour Homes"}
    assert client.post("/api/agencies", json=form, headers=auth(admin)).status_code == 422


def test_agency_admin_endpoints_require_platform_admin(client, make_agency, make_user):
    agency = make_agency()
    agency_admin = make_user(agency)

    assert client.get("/api/agencies", headers=auth(agency_admin)).status_code == 401
    assert client.post("/api/agencies", json=AGENCY_FORM, headers=auth(agency_admin)).status_code == 401
    assert client.delete(f"/api/agencies/{agency.id}", headers=auth(agency_admin)).status_code == 401


def test_list_agencies_with_counts_and_status_filter(client, make_agency, make_user, make_property, make_enquiry):
    acme = make_agency("acme")
    make_agency("gone", status=AgencyStatus.SUSPENDED.value)
    make_enquiry(make_property(acme))
    make_property(acme)
    make_user(acme)
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)

    body = client.get("/api/agencies", headers=auth(admin)).json()
    assert body["pagination"]["total"] == 2
    counts = {item["slug"]: item["counts"] for item in body["data"]}
    assert counts["acme"] == {"properties": 2, "users": 1, "enquiries": 1}
    assert counts["gone"] == {"properties": 0, "users": 0, "enquiries": 0}

    body = client.get("/api/agencies", params={"status": "SUSPENDED"}, headers=auth(admin)).json()
    assert [item["slug"] for item in body["data"]] == ["gone"]


def test_get_agency_access(client, make_agency, make_user):
    acme = make_agency("acme")
    other = make_agency("other")
    member = make_user(acme, role=UserRole.AGENT.value)

    assert client.get(f"/api/agencies/{acme.id}", headers=auth(member)).json()["slug"] == "acme"
    assert client.get(f"/api/agencies/{other.id}", headers=auth(member)).status_code == 403


def test_agency_admin_updates_branding(client, make_agency, make_user):
    agency = make_agency()
    agency_admin = make_user(agency)

    response = client.put(
        f"/api/agencies/{agency.id}",
        json={"primaryColor": "#112233", "website": "https://acme.example.com"},
        headers=auth(agency_admin)
    )
    assert response.status_code == 200
    assert response.json()["primaryColor"] == "#112233"
    assert response.json()["website"] == "https://acme.example.com"


def test_agency_admin_cannot_change_plan_fields(client, make_agency, make_user):
    agency = make_agency()
    agency_admin = make_user(agency)

    for field, value in (("status", "SUSPENDED"), ("maxProperties", 500), ("maxUsers", 50), ("planTier", "pro")):
        response = client.put(f"/api/agencies/{agency.id}", json={field: value}, headers=auth(agency_admin))
        assert response.status_code == 403


def test_agent_cannot_update_agency(client, make_agency, make_user):
    agency = make_agency()
    agent = make_user(agency, role=UserRole.AGENT.value)
    response = client.put(f"/api/agencies/{agency.id}", json={"phone": "0123"}, headers=auth(agent))
    assert response.status_code == 403


def test_platform_admin_changes_plan(client, make_agency, make_user):
    agency = make_agency()
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)

    response = client.put(
        f"/api/agencies/{agency.id}",
        json={"maxProperties": 50, "maxUsers": 12, "planTier": "pro"},
        headers=auth(admin)
    )
    assert response.json()["maxProperties"] == 50
    assert response.json()["maxUsers"] == 12
    assert response.json()["planTier"] == "pro"


def test_invalid_colour_is_rejected(client, make_agency, make_user):
    agency = make_agency()
    response = client.put(f"/api/agencies/{agency.id}", json={"accentColor": "red"}, headers=auth(make_user(agency)))
    assert response.status_code == 422


def test_delete_agency_suspends_by_default(client, db, make_agency, make_user, make_property):
    agency = make_agency()
    make_property(agency)
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)

    response = client.delete(f"/api/agencies/{agency.id}", headers=auth(admin))
    assert response.json() == {"success": True, "deleted": False}

    db.expire_all()
    assert db.get(Agency, agency.id).status == AgencyStatus.SUSPENDED.value
    assert client.get("/api/properties").json()["pagination"]["total"] == 0


def test_delete_agency_permanently(client, db, make_agency, make_user, make_property, make_enquiry):
    agency = make_agency()
    make_enquiry(make_property(agency))
    make_user(agency)
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)

    response = client.delete(f"/api/agencies/{agency.id}", params={"permanent": "true"}, headers=auth(admin))
    assert response.json() == {"success": True, "deleted": True}

    db.expire_all()
    assert db.query(Agency).count() == 0
    assert db.query(Property).count() == 0
    assert db.query(User).count() == 1


def test_missing_agency_is_404(client, make_user, db):
    admin = make_user(role=UserRole.PLATFORM_ADMIN.value)
    assert client.get("/api/agencies/9999", headers=auth(admin)).status_code == 404
