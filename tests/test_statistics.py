import random

from pakli.schemas.outage import Outage
from pakli.services.outages import (
    get_outage_coordinates,
    get_outage_statistics,
    get_outage_type_name,
    get_service_color,
    get_service_icon_name,
    get_service_name,
    get_severity_name,
    transform_json_data,
)


def test_statistics_counts() -> None:
    outages = transform_json_data(
        [
            {"category": "emergency", "serviceType": "water"},
            {"category": "emergency", "serviceType": "electricity"},
            {"category": "scheduled", "serviceType": "heating"},
            {"type": "Текущ ремонт", "serviceType": "water"},
        ]
    )

    stats = get_outage_statistics(outages)

    assert stats.total == 4
    assert stats.emergency == 2
    assert stats.scheduled == 1
    assert (stats.water, stats.electricity, stats.heating) == (2, 1, 1)


def test_statistics_never_exceed_total() -> None:
    outages = transform_json_data([{"type": "Нещо друго"}, {"category": "emergency"}])

    stats = get_outage_statistics(outages)

    for count in (stats.emergency, stats.scheduled, stats.water, stats.electricity, stats.heating):
        assert count <= stats.total
    assert stats.emergency + stats.scheduled < stats.total


def test_statistics_of_empty_list() -> None:
    assert get_outage_statistics([]).model_dump() == {
        "total": 0, "emergency": 0, "scheduled": 0, "water": 0, "electricity": 0, "heating": 0,
    }


def test_display_labels() -> None:
    assert get_service_name("heating") == "Топлофикация"
    assert get_service_name("gas") == "Неизвестно"
    assert get_service_icon_name("electricity") == "zap"
    assert get_service_icon_name("") == "activity"
    assert get_service_color("water") == "blue"
    assert get_severity_name("low") == "Нисък"
    assert get_severity_name("?") == "Неизвестен"
    assert get_outage_type_name("Аварийно спиране") == "Авария"
    assert get_outage_type_name("Планирано спиране") == "Планирано"
    assert get_outage_type_name("Текущо") == "В ход"


def _outage(area, district):
    return Outage(id="x", area=area, type="Планирано спиране", district=district)


def test_coordinates_match_district() -> None:
    coords = get_outage_coordinates(_outage("бл. 12", "Младост"), rng=random.Random(1))

    assert coords["district"] == "Младост"
    assert abs(coords["lat"] - 42.6506) <= 0.005
    assert abs(coords["lng"] - 23.375) <= 0.005


def test_coordinates_match_area_text() -> None:
    coords = get_outage_coordinates(_outage("кв. Лозенец, ул. Крум Попов", "Неизвестен"), rng=random.Random(2))

    assert coords["district"] == "Лозенец"


def test_coordinates_default_to_sofia_centre() -> None:
    coords = get_outage_coordinates(_outage("Неизвестна зона", "Неизвестен"), rng=random.Random(3))

    assert coords["district"] == "София"
    assert abs(coords["lat"] - 42.6977) <= 0.01
