import responses

from pakli.services.outages_client import get_outages
from pakli.services.store import AppStore

BASE = "http://pakli.local"


@responses.activate
def test_returns_data_on_success() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/api/outages",
        json={"success": True, "data": [{"id": "a"}], "total": 1, "timestamp": "2025-01-15T10:00:00Z"},
    )

    assert get_outages(BASE + "/") == [{"id": "a"}]


@responses.activate
def test_http_error_yields_empty_list() -> None:
    responses.add(responses.GET, f"{BASE}/api/outages", status=503)

    assert get_outages(BASE) == []


@responses.activate
def test_invalid_payload_yields_empty_list() -> None:
    responses.add(responses.GET, f"{BASE}/api/outages", json={"success": False})

    assert get_outages(BASE) == []


@responses.activate
def test_non_json_body_yields_empty_list() -> None:
    responses.add(responses.GET, f"{BASE}/api/outages", body="<html>oops</html>")

    assert get_outages(BASE) == []


@responses.activate
def test_store_fetches_through_client() -> None:
    responses.add(
        responses.GET,
        f"{BASE}/api/outages",
        json={"success": True, "data": [{"id": "a", "area": "ж.к. Младост 1", "category": "emergency",
                                         "serviceType": "water", "district": "Младост"}],
              "total": 1, "timestamp": "2025-01-15T10:00:00Z"},
    )
    store = AppStore()
    store.set_show_only_user_district(False)

    store.fetch_from_api(BASE)

    assert [o.id for o in store.filtered_outages] == ["a"]
    assert store.filtered_outages[0].type == "Аварийно спиране"
    assert store.error is None
