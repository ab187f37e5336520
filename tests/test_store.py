import json
from datetime import datetime, timedelta, timezone

from pakli.schemas.subscription import SubscriptionOut
from pakli.schemas.user import UserOut
from pakli.services.store import (
    LEGACY_SUBSCRIPTION_KEY,
    LEGACY_USER_KEY,
    LOAD_ERROR,
    STORAGE_KEY,
    AppStore,
    JsonFileStorage,
    MapType,
    ViewMode,
)

RAW = [
    {"id": "a", "category": "emergency", "serviceType": "water", "location": {"district": "Младост"},
     "affectedArea": "ж.к. Младост 1", "severity": "high"},
    {"id": "b", "category": "scheduled", "serviceType": "heating", "location": {"district": "Люлин"},
     "affectedArea": "ж.к. Люлин 5", "severity": "high"},
]


def _user():
    return UserOut(id="u1", email="ivan@pakli.bg", name="Иван", district="Младост")


def _subscription():
    now = datetime.now(timezone.utc)
    return SubscriptionOut(active=True, expires_at=now + timedelta(days=30), payment_method="stripe",
                           amount=1, currency="BGN", start_date=now)


def test_fetch_normalizes_and_applies_filters() -> None:
    store = AppStore()
    store.set_show_only_user_district(False)

    store.fetch_outages(lambda: RAW)

    assert [o.id for o in store.outages] == ["a", "b"]
    assert [o.id for o in store.filtered_outages] == ["a", "b"]
    assert store.loading is False
    assert store.error is None


def test_fetch_failure_sets_bulgarian_error() -> None:
    store = AppStore()

    def boom():
        raise RuntimeError("network down")

    store.fetch_outages(boom)

    assert store.error == LOAD_ERROR
    assert store.loading is False
    assert store.outages == []


def test_empty_fetch_keeps_previous_outages() -> None:
    store = AppStore()
    store.fetch_outages(lambda: RAW)
    store.fetch_outages(lambda: [])

    assert len(store.outages) == 2


def test_user_district_and_notifications() -> None:
    store = AppStore()
    store.set_user(_user())
    store.fetch_outages(lambda: RAW)

    assert [o.id for o in store.filtered_outages] == ["a"]
    assert store.user_notifications == []

    store.set_subscription(_subscription())

    assert [o.id for o in store.user_notifications] == ["a"]


def test_filter_changes_refresh_derived_lists() -> None:
    store = AppStore()
    store.set_show_only_user_district(False)
    store.fetch_outages(lambda: RAW)

    store.set_selected_service("heating")
    assert [o.id for o in store.filtered_outages] == ["b"]

    store.set_selected_category("emergency")
    assert store.filtered_outages == []

    store.reset_filters()
    assert [o.id for o in store.filtered_outages] == ["a", "b"]

    store.set_user(_user())
    store.set_show_only_user_district(True)
    assert [o.id for o in store.filtered_outages] == ["a"]

    store.set_user(None)
    assert [o.id for o in store.filtered_outages] == ["a", "b"]


def test_reset_filters_keeps_district_toggle() -> None:
    store = AppStore()
    store.set_search_query("младост")
    store.set_selected_service("water")
    store.set_selected_category("emergency")
    store.set_selected_type("emergency")
    store.set_show_only_user_district(False)

    store.reset_filters()

    assert store.filters.search_query == ""
    assert store.filters.selected_service == "all"
    assert store.filters.selected_category == "all"
    assert store.filters.selected_type == "all"
    assert store.filters.show_only_user_district is False


def test_persist_keeps_only_user_subscription_and_view(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path / "local-storage.json")
    store = AppStore(storage)
    store.set_user(_user())
    store.set_subscription(_subscription())
    store.set_map_type(MapType.LEAFLET)
    store.set_view_mode(ViewMode.LIST)
    store.set_search_query("не се пази")

    saved = json.loads(storage.get_item(STORAGE_KEY))["state"]

    assert set(saved) == {"user", "subscription", "mapType", "viewMode"}
    assert saved["mapType"] == "leaflet"
    assert saved["viewMode"] == "list"
    assert saved["user"]["emailNotifications"] is False

    restored = AppStore(storage)
    restored.hydrate()

    assert restored.user == store.user
    assert restored.subscription.payment_method == "stripe"
    assert restored.map_type is MapType.LEAFLET
    assert restored.view_mode is ViewMode.LIST
    assert restored.filters.search_query == ""


def test_hydrate_reads_legacy_keys(tmp_path) -> None:
    storage = JsonFileStorage(tmp_path / "local-storage.json")
    storage.set_item(LEGACY_USER_KEY, json.dumps({"id": "u9", "email": "maria@pakli.bg", "district": "Люлин"}))
    storage.set_item(LEGACY_SUBSCRIPTION_KEY, _subscription().model_dump_json(by_alias=True))

    store = AppStore(storage)
    store.hydrate()

    assert store.user.district == "Люлин"
    assert store.subscription.active is True
    assert store.map_type is MapType.GOOGLE
    assert store.view_mode is ViewMode.MAP


def test_hydrate_ignores_garbage(tmp_path) -> None:
    path = tmp_path / "local-storage.json"
    path.write_text("{not json", encoding="utf-8")
    store = AppStore(JsonFileStorage(path))

    store.hydrate()

    assert store.user is None
    assert store.subscription is None
