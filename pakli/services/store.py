# File: pakli/services/store.py
"""
Client-side application state: outages, derived filtered list, filters,
the logged-in user and their subscription, plus view preferences.

Only user, subscription, map type and view mode survive a restart; they are
persisted under the "pakli-storage" key of a small key/value JSON file that
plays the role of the browser's local storage.
"""
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from pakli.schemas.outage import Outage, OutageFilters
from pakli.schemas.subscription import SubscriptionOut
from pakli.schemas.user import UserOut
from pakli.services.outages import filter_outages, transform_json_data
from pakli.services.outages_client import get_outages

logger = logging.getLogger(__name__)

STORAGE_KEY = "pakli-storage"
LEGACY_USER_KEY = "sofia-utility-user"
LEGACY_SUBSCRIPTION_KEY = "sofia-utility-subscription"
LOAD_ERROR = "Възникна грешка при зареждане на данните"


class ViewMode(str, Enum):
    MAP = "map"
    LIST = "list"


class MapType(str, Enum):
    LEAFLET = "leaflet"
    MAPBOX = "mapbox"
    GOOGLE = "google"


class JsonFileStorage:
    """String key -> string value, backed by one JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


def _loads(raw: Optional[str]):
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


class AppStore:
    def __init__(self, storage: Optional[JsonFileStorage] = None):
        self.storage = storage

        self.user: Optional[UserOut] = None
        self.subscription: Optional[SubscriptionOut] = None

        self.outages: list[Outage] = []
        self.filtered_outages: list[Outage] = []
        self.selected_outage: Optional[Outage] = None
        self.user_notifications: list[Outage] = []

        self.view_mode = ViewMode.MAP
        self.map_type = MapType.GOOGLE
        self.loading = False
        self.error: Optional[str] = None
        self.show_payment_modal = False

        self.filters = OutageFilters()

    # --- user ---

    def set_user(self, user: Optional[UserOut]) -> None:
        self.user = user
        self.persist()
        self.apply_filters()

    def set_subscription(self, subscription: Optional[SubscriptionOut]) -> None:
        self.subscription = subscription
        self.persist()
        self.apply_filters()

    # --- outages ---

    def set_outages(self, outages: list[Outage]) -> None:
        self.outages = outages
        self.apply_filters()

    def set_selected_outage(self, outage: Optional[Outage]) -> None:
        self.selected_outage = outage

    # --- view ---

    def set_view_mode(self, mode: ViewMode) -> None:
        self.view_mode = ViewMode(mode)
        self.persist()

    def set_map_type(self, map_type: MapType) -> None:
        self.map_type = MapType(map_type)
        self.persist()

    def set_loading(self, loading: bool) -> None:
        self.loading = loading

    def set_error(self, error: Optional[str]) -> None:
        self.error = error

    def set_show_payment_modal(self, show: bool) -> None:
        self.show_payment_modal = show

    # --- filters ---

    def set_search_query(self, query: str) -> None:
        self.filters = self.filters.model_copy(update={"search_query": query})
        self.apply_filters()

    def set_selected_service(self, service: str) -> None:
        self.filters = self.filters.model_copy(update={"selected_service": service})
        self.apply_filters()

    def set_selected_category(self, category: str) -> None:
        self.filters = self.filters.model_copy(update={"selected_category": category})
        self.apply_filters()

    def set_selected_type(self, outage_type: str) -> None:
        self.filters = self.filters.model_copy(update={"selected_type": outage_type})
        self.apply_filters()

    def set_show_only_user_district(self, show: bool) -> None:
        self.filters = self.filters.model_copy(update={"show_only_user_district": show})
        self.apply_filters()

    def reset_filters(self) -> None:
        self.filters = OutageFilters(show_only_user_district=self.filters.show_only_user_district)
        self.apply_filters()

    def apply_filters(self) -> None:
        filtered, notifications = filter_outages(self.outages, self.user, self.filters, self.subscription)
        self.filtered_outages = filtered
        self.user_notifications = notifications

    def fetch_outages(self, fetcher: Callable[[], list]) -> None:
        """Load raw records via `fetcher`, normalize them and refresh the derived lists."""
        self.set_loading(True)
        self.set_error(None)
        try:
            raw = fetcher()
            if raw:
                self.selected_outage = None
                self.set_outages(transform_json_data(raw))
            else:
                self.apply_filters()
        except Exception as e:
            logging.error(f"Error fetching outages: {e}", exc_info=True)
            self.set_error(LOAD_ERROR)
            self.apply_filters()
        finally:
            self.set_loading(False)

    def fetch_from_api(self, base_url: str, session=None) -> None:
        self.fetch_outages(lambda: get_outages(base_url, session))

    # --- persistence ---

    def snapshot(self) -> dict:
        return {
            "user": self.user.model_dump(mode="json", by_alias=True) if self.user else None,
            "subscription": self.subscription.model_dump(mode="json", by_alias=True) if self.subscription else None,
            "mapType": self.map_type.value,
            "viewMode": self.view_mode.value,
        }

    def persist(self) -> None:
        if self.storage is None:
            return
        self.storage.set_item(STORAGE_KEY, json.dumps({"state": self.snapshot(), "version": 0}, ensure_ascii=False))

    def hydrate(self) -> None:
        if self.storage is None:
            return
        stored = _loads(self.storage.get_item(STORAGE_KEY)) or {}
        state = stored.get("state") if isinstance(stored, dict) else None
        state = state if isinstance(state, dict) else {}

        user = state.get("user") or _loads(self.storage.get_item(LEGACY_USER_KEY))
        subscription = state.get("subscription") or _loads(self.storage.get_item(LEGACY_SUBSCRIPTION_KEY))

        try:
            self.user = UserOut.model_validate(user) if user else None
        except ValidationError:
            logger.warning("Dropping malformed persisted user")
            self.user = None
        try:
            self.subscription = SubscriptionOut.model_validate(subscription) if subscription else None
        except ValidationError:
            logger.warning("Dropping malformed persisted subscription")
            self.subscription = None

        try:
            self.map_type = MapType(state.get("mapType", self.map_type))
        except ValueError:
            pass
        try:
            self.view_mode = ViewMode(state.get("viewMode", self.view_mode))
        except ValueError:
            pass

        self.apply_filters()
