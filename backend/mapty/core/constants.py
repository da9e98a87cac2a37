"""Shared application constants.

Centralizes labels and display values used by the workout model and the
map/list rendering so we can adjust them in one place.
"""

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# Map icons per workout kind (list entries and popups)
KIND_ICONS = {
    "running": "🏃‍♂️",
    "cycling": "🚴‍♀️",
}

DURATION_ICON = "⏱"
METRIC_ICON = "⚡️"
CADENCE_ICON = "🦶🏼"
ELEVATION_ICON = "⛰"

# Valid coordinate ranges (degrees)
LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)
