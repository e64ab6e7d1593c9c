"""
Tests for chef catering: opting in, the chef directory and inquiries.
"""

from test_fixtures import API, auth_headers, client, db_session, make_user
from domain.models import Notification


def _enable(chef, location="94110", radius=25, bio="Private dinners and small events"):
    return client.post(
        f"{API}/catering/enable",
        json={"location": location, "radius_miles": radius, "bio": bio},
        headers=auth_headers(chef),
    )


def _inquiry(customer, chef, **overrides):
    body = {
        "chef_id": str(chef.id),
        "event_date": "2025-09-20",
        "guest_count": 40,
        "event_type": "wedding rehearsal",
        "cuisine_preferences": ["mexican", "bbq"],
        "budget": "$2,000-$3,000",
        "message": "Family-style dinner on the patio",
    }
    body.update(overrides)
    return client.post(f"{API}/catering/inquiries", json=body, headers=auth_headers(customer))


# =============================================================================
# CHEF SETTINGS
# =============================================================================


def test_only_chefs_can_enable_catering(db_session):
    cook = make_user(db_session)
    r = _enable(cook)
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "NOT_A_CHEF"


def test_enable_settings_and_disable(db_session):
    chef = make_user(db_session, "chef")
    headers = auth_headers(chef)

    enabled = _enable(chef)
    assert enabled.status_code == 200
    assert enabled.json() == {
        "catering_enabled": True,
        "catering_available": True,
        "location": "94110",
        "radius_miles": 25,
        "bio": "Private dinners and small events",
        "is_chef": True,
    }

    r = client.patch(
        f"{API}/catering/settings", json={"radius_miles": 60, "available": False}, headers=headers
    )
    assert r.json()["radius_miles"] == 60
    assert r.json()["catering_available"] is False

    client.post(f"{API}/catering/disable", headers=headers)
    status = client.get(f"{API}/catering/status", headers=headers).json()
    assert status["catering_enabled"] is False

    blocked = client.patch(f"{API}/catering/settings", json={"bio": "Back soon"}, headers=headers)
    assert blocked.status_code == 400
    assert blocked.json()["error"]["code"] == "CATERING_DISABLED"


def test_enable_rejects_short_location(db_session):
    chef = make_user(db_session, "chef")
    assert _enable(chef, location="94").status_code == 400


# =============================================================================
# CHEF DIRECTORY
# =============================================================================


def test_find_chefs_by_location_and_radius(db_session):
    near = make_user(db_session, "chef")
    far_reaching = make_user(db_session, "chef")
    elsewhere = make_user(db_session, "chef")
    _enable(near, radius=10)
    _enable(far_reaching, radius=50)
    _enable(elsewhere, location="10001", radius=100)

    wide = client.get(f"{API}/catering/chefs", params={"location": "94110", "radius": 25}).json()
    assert [c["chef"]["id"] for c in wide] == [str(far_reaching.id)]
    assert wide[0]["radius_miles"] == 50

    close = client.get(f"{API}/catering/chefs", params={"location": "94110", "radius": 5}).json()
    assert {c["chef"]["id"] for c in close} == {str(near.id), str(far_reaching.id)}


def test_unavailable_chefs_are_not_listed(db_session):
    chef = make_user(db_session, "chef")
    _enable(chef)
    client.patch(f"{API}/catering/settings", json={"available": False}, headers=auth_headers(chef))

    assert client.get(f"{API}/catering/chefs", params={"location": "94110"}).json() == []


# =============================================================================
# INQUIRIES
# =============================================================================


def test_inquiry_notifies_chef_and_is_listed_both_ways(db_session):
    chef = make_user(db_session, "chef")
    customer = make_user(db_session, "casual")
    _enable(chef)

    r = _inquiry(customer, chef)

    assert r.status_code == 201
    inquiry = r.json()
    assert inquiry["status"] == "pending"
    assert inquiry["cuisine_preferences"] == ["mexican", "bbq"]

    note = db_session.query(Notification).filter_by(user_id=chef.id).one()
    assert note.type == "catering_inquiry"
    assert note.data == {"inquiry_id": inquiry["id"]}

    received = client.get(f"{API}/catering/inquiries", headers=auth_headers(chef)).json()
    assert [i["id"] for i in received["received"]] == [inquiry["id"]]
    assert received["sent"] == []

    sent = client.get(f"{API}/catering/inquiries", headers=auth_headers(customer)).json()
    assert [i["id"] for i in sent["sent"]] == [inquiry["id"]]


def test_inquiry_rejections(db_session):
    chef = make_user(db_session, "chef")
    customer = make_user(db_session, "casual")

    closed = _inquiry(customer, chef)
    assert closed.status_code == 400
    assert closed.json()["error"]["code"] == "CATERING_UNAVAILABLE"

    _enable(chef)
    assert _inquiry(chef, chef).status_code == 400
    assert _inquiry(customer, chef, message="").status_code == 400


def test_only_the_chef_updates_inquiry_status(db_session):
    chef = make_user(db_session, "chef")
    customer = make_user(db_session, "casual")
    _enable(chef)
    inquiry = _inquiry(customer, chef).json()
    url = f"{API}/catering/inquiries/{inquiry['id']}"

    denied = client.patch(url, json={"status": "accepted"}, headers=auth_headers(customer))
    assert denied.status_code == 403
    assert denied.json()["error"]["code"] == "NOT_OWNER"

    assert client.patch(url, json={"status": "maybe"}, headers=auth_headers(chef)).status_code == 400

    accepted = client.patch(url, json={"status": "accepted"}, headers=auth_headers(chef))
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"
