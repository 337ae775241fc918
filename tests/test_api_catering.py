"""
API tests for the catering configurator endpoints.
"""
from unittest.mock import MagicMock, patch

from thali_club.catering.catalog import ADD_ON_MENU
from thali_club.catering.persistence import SnapshotStore, get_snapshot_writer
from thali_club.services.wizard_session import clear_cache

MAINS = ADD_ON_MENU["vegetarianChoices"]
DESSERTS = ADD_ON_MENU["dessertChoices"]


def _client_id(client):
    return client.cookies.get("catering_client")


def _open(client, package="Vegetarian"):
    resp = client.post("/catering/order", json={"package": package})
    assert resp.status_code == 200
    return resp.json()


def _to_checkout(client, contact):
    """Configure a Vegetarian order for 20 and fill in the contact form."""
    _open(client)
    for item in MAINS[:3]:
        client.post("/catering/order/selections", json={"item": item})
    client.post("/catering/order/next")
    client.post("/catering/order/selections", json={"item": DESSERTS[0]})
    client.post("/catering/order/next")
    client.post("/catering/order/checkout")
    client.put("/catering/order/party-size", json={"people": 20})
    resp = client.patch("/catering/order/contact", json=contact)
    assert resp.json()["state"] == "checkout"
    return resp.json()


def _ok_response():
    response = MagicMock()
    response.ok = True
    response.status_code = 200
    return response


def test_list_packages(client):
    resp = client.get("/catering/packages")
    assert resp.status_code == 200
    packages = {p["name"]: p for p in resp.json()}
    assert set(packages) == {"Vegetarian", "Snacks & Main Course", "Premium Vegetarian", "Curry Tray by Weight"}
    assert packages["Vegetarian"]["unit_price"] == "16.99"
    assert packages["Vegetarian"]["add_on_fee"] == "0.99"
    assert packages["Curry Tray by Weight"]["add_on_fee"] is None
    assert packages["Snacks & Main Course"]["steps"][3]["options"] == ["Roti", "Tandoori Naan"]


def test_first_call_issues_client_cookie(client):
    resp = client.get("/catering/order")
    assert resp.status_code == 200
    assert resp.json()["state"] == "closed"
    assert "catering_client" in resp.cookies


def test_open_order_view(client):
    view = _open(client)
    assert view["state"] == "configuring"
    assert view["package"]["name"] == "Vegetarian"
    assert view["current_step"]["index"] == 1
    assert view["current_step"]["total"] == 2
    assert view["current_step"]["remaining"] == 3
    assert view["current_step"]["can_advance"] is False
    assert view["quantity"]["party_size"] == 15
    assert view["min_party_size"] == 15
    assert view["quote"]["subtotal"] == "254.85"
    assert view["quote"]["tax"] == "33.13"
    assert view["quote"]["grand_total"] == "287.98"


def test_open_unknown_package(client):
    resp = client.post("/catering/order", json={"package": "Sushi Platter"})
    assert resp.status_code == 404


def test_mutation_without_open_order(client):
    assert client.post("/catering/order/next").status_code == 404
    assert client.post("/catering/order/selections", json={"item": MAINS[0]}).status_code == 404
    assert client.post("/catering/order/submit").status_code == 404


def test_toggle_past_cap_is_ignored(client):
    _open(client)
    for item in MAINS[:3]:
        view = client.post("/catering/order/selections", json={"item": item}).json()
    assert view["current_step"]["can_advance"] is True

    resp = client.post("/catering/order/selections", json={"item": MAINS[3]})
    assert resp.status_code == 200
    assert resp.json()["current_step"]["selected"] == list(MAINS[:3])


def test_next_blocked_until_step_complete(client):
    _open(client)
    client.post("/catering/order/selections", json={"item": MAINS[0]})
    assert client.post("/catering/order/next").json()["current_step"]["index"] == 1


def test_navigation_to_checkout_and_back(client, contact):
    view = _to_checkout(client, contact)
    assert view["current_step"] is None
    assert view["contact"]["full_name"] == "Priya Sharma"

    view = client.post("/catering/order/back").json()
    assert view["state"] == "summary"
    view = client.post("/catering/order/back").json()
    assert view["state"] == "configuring"
    assert view["current_step"]["index"] == 2


def test_add_on_updates_quote(client):
    _open(client)
    view = client.put("/catering/order/add-on", json={"include": True}).json()
    assert view["include_add_on"] is True
    assert view["quote"]["per_person"] == "17.98"
    assert view["quote"]["subtotal"] == "269.70"


def test_party_size_clamped(client):
    _open(client)
    view = client.put("/catering/order/party-size", json={"people": 4}).json()
    assert view["quantity"]["party_size"] == 15


def test_weight_order(client):
    _open(client, "Curry Tray by Weight")
    view = client.put("/catering/order/weight", json={"kg": "2.5"}).json()
    assert view["quantity"]["weight_kg"] == "2.5"
    assert view["quote"]["per_person"] is None
    assert view["quote"]["grand_total"] == "62.50"
    assert view["quote"]["has_tax"] is False
    assert view["add_on_fee"] is None


def test_huge_weight_is_clamped_and_order_stays_usable(client):
    _open(client, "Curry Tray by Weight")
    resp = client.put("/catering/order/weight", json={"kg": "1e30"})
    assert resp.status_code == 200
    assert resp.json()["quantity"]["weight_kg"] == "500"
    assert resp.json()["quote"]["grand_total"] == "12500.00"

    assert client.get("/catering/order").status_code == 200
    assert client.post("/catering/order/back").status_code == 200


def test_huge_party_size_is_clamped(client):
    _open(client)
    resp = client.put("/catering/order/party-size", json={"people": 10 ** 27})
    assert resp.status_code == 200
    assert resp.json()["quantity"]["party_size"] == 5000
    assert resp.json()["quote"]["subtotal"] == "84950.00"
    assert client.get("/catering/order").status_code == 200


def test_non_finite_weight_rejected(client):
    _open(client, "Curry Tray by Weight")
    assert client.put("/catering/order/weight", json={"kg": "NaN"}).status_code == 422
    assert client.get("/catering/order").json()["quantity"]["weight_kg"] == "1"


def test_bread_step(client):
    _open(client, "Snacks & Main Course")
    view = client.post("/catering/order/bread", json={"item": "Tandoori Naan", "step": 4}).json()
    assert view["selections"]["4"] == ["Tandoori Naan"]


def test_close_order_clears_snapshot(client):
    _open(client)
    resp = client.delete("/catering/order")
    assert resp.json()["state"] == "closed"

    get_snapshot_writer().flush()
    import thali_club.db as db
    assert SnapshotStore(db.session_factory, _client_id(client)).load() is None


def test_order_restored_after_cache_cleared(client):
    _open(client, "Premium Vegetarian")
    client.post("/catering/order/selections", json={"item": "Samosa"})
    get_snapshot_writer().flush()

    clear_cache()
    view = client.get("/catering/order").json()
    assert view["state"] == "configuring"
    assert view["package"]["name"] == "Premium Vegetarian"
    assert view["selections"] == {"1": ["Samosa"]}


def test_snapshot_that_no_longer_fits_package_is_ignored(client):
    import thali_club.db as db
    _open(client)
    client.put("/catering/order/party-size", json={"people": 20})
    get_snapshot_writer().flush()

    # Same snapshot, but its package is now priced by weight
    store = SnapshotStore(db.session_factory, _client_id(client))
    data = store.load()
    data["package_name"] = "Curry Tray by Weight"
    store.save(data)
    clear_cache()

    resp = client.get("/catering/order")
    assert resp.status_code == 200
    assert resp.json()["state"] == "closed"


@patch("thali_club.catering.submission.requests.post")
def test_submit_success_closes_order(mock_post, client, contact):
    mock_post.return_value = _ok_response()
    _to_checkout(client, contact)

    resp = client.post("/catering/order/submit")

    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["view"]["state"] == "closed"
    mock_post.assert_called_once()
    payload = mock_post.call_args.kwargs["json"]
    assert payload["form"]["party_size"] == 20
    assert client.get("/catering/order").json()["state"] == "closed"


@patch("thali_club.catering.submission.requests.post")
def test_submit_validation_error(mock_post, client, contact):
    _to_checkout(client, dict(contact, full_name=""))

    resp = client.post("/catering/order/submit")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please fill in Full Name, Phone, Email, Date and Party Size."
    mock_post.assert_not_called()


@patch("thali_club.catering.submission.requests.post")
def test_submit_relay_failure_keeps_order(mock_post, client, contact):
    failed = MagicMock()
    failed.ok = False
    failed.status_code = 500
    mock_post.return_value = failed
    _to_checkout(client, contact)

    resp = client.post("/catering/order/submit")

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Failed to send. Please try again."
    view = client.get("/catering/order").json()
    assert view["state"] == "checkout"
    assert view["contact"]["email"] == contact["email"]


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "wizard_cache" in resp.json()


def test_request_id_can_be_provided_by_client(client):
    resp = client.get("/health", headers={"X-Request-ID": "test-request-id-12345"})
    assert resp.headers["X-Request-ID"] == "test-request-id-12345"
