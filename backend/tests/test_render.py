from datetime import datetime, timezone

from mapty.core.constants import KIND_ICONS
from mapty.core.time_utils import format_pace
from mapty.models.activity import build_activity
from mapty.ui.render import list_entry, popup_style, popup_text

WHEN = datetime(2025, 7, 14, 18, 5, tzinfo=timezone.utc)


def test_running_row_shows_pace_and_cadence():
    run = build_activity("running", (51.5, -0.1), 5, 31.25, 176, created_at=WHEN)
    entry = list_entry(run)

    assert entry.title == "Running on July 14"
    assert [(d.value, d.unit) for d in entry.details] == [
        ("5", "km"),
        ("31.25", "min"),
        ("6:15", "min/km"),
        ("176", "spm"),
    ]


def test_cycling_row_shows_speed_and_elevation():
    ride = build_activity("cycling", (51.5, -0.1), 27.5, 71, 320, created_at=WHEN)
    entry = list_entry(ride)

    assert [(d.value, d.unit) for d in entry.details] == [
        ("27.5", "km"),
        ("71", "min"),
        ("23.2", "km/h"),
        ("320", "m"),
    ]


def test_popup_carries_kind_icon_label_and_style():
    ride = build_activity("cycling", (51.5, -0.1), 20, 60, 0, created_at=WHEN)
    assert popup_text(ride) == f"{KIND_ICONS['cycling']} Cycling on July 14"
    assert popup_style(ride) == "cycling-popup"


def test_format_pace():
    assert format_pace(6) == "6:00"
    assert format_pace(6.25) == "6:15"
    assert format_pace(4.999) == "5:00"
