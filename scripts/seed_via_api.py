#!/usr/bin/env python3
"""
Seed workouts into a running Mapty backend through its HTTP API.

Drives the same flow as the browser: load the map, click a spot, pick the
workout kind, submit the form.

Pattern per "week" (scattered around --lat/--lng):
  - 2 easy runs, 1 tempo run
  - 1 long ride

Usage examples:
  - Local dev server:
      python scripts/seed_via_api.py --base-url http://localhost:8000
  - Somewhere else, 3 weeks worth, around Paris:
      python scripts/seed_via_api.py --base-url http://<HOST> --weeks 3 --lat 48.8566 --lng 2.3522
"""

from __future__ import annotations

import argparse
import random
import sys
from typing import List, Tuple

try:
    import requests  # type: ignore
except ImportError:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


# (kind, distance_km, pace or speed, extra)
WEEK_PLAN: List[Tuple[str, float, float, float]] = [
    ("running", 6.0, 5.8, 172),    # easy, min/km
    ("running", 8.0, 4.9, 180),    # tempo
    ("running", 6.0, 5.8, 172),    # easy
    ("cycling", 45.0, 26.0, 420),  # long ride, km/h, m elevation
]


def round1(x: float) -> float:
    return round(x + 1e-9, 1)


def duration_min(kind: str, distance_km: float, rate: float) -> float:
    """Minutes for a distance at a pace (running) or speed (cycling)."""
    if kind == "running":
        return round1(distance_km * rate)
    return round1(distance_km / rate * 60)


def jitter(lat: float, lng: float, spread: float = 0.03) -> Tuple[float, float]:
    return (
        round(lat + random.uniform(-spread, spread), 5),
        round(lng + random.uniform(-spread, spread), 5),
    )


def call(base_url: str, method: str, path: str, payload: dict | None = None) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.request(method, url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{method} {path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def seed_week(base_url: str, lat: float, lng: float) -> int:
    created = 0
    for kind, distance, rate, extra in WEEK_PLAN:
        spot_lat, spot_lng = jitter(lat, lng)
        call(base_url, "POST", "map/click", {"lat": spot_lat, "lng": spot_lng})
        call(base_url, "PUT", "session/kind", {"kind": kind})

        payload = {
            "kind": kind,
            "distance_km": distance,
            "duration_min": duration_min(kind, distance, rate),
        }
        payload["cadence_spm" if kind == "running" else "elevation_gain_m"] = extra
        call(base_url, "POST", "session/submit", payload)
        created += 1
    return created


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed workouts through the Mapty API")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--weeks", type=int, default=4, help="Weeks of workouts to create (default 4)")
    ap.add_argument("--lat", type=float, default=51.5073, help="Latitude to scatter workouts around")
    ap.add_argument("--lng", type=float, default=-0.1657, help="Longitude to scatter workouts around")
    ap.add_argument("--reset", action="store_true", help="Delete existing workouts first")
    args = ap.parse_args()

    base_url = args.base_url

    if args.reset:
        call(base_url, "DELETE", "workouts/")

    # Map must be loaded before clicks are accepted
    call(base_url, "POST", "map/load", {"lat": args.lat, "lng": args.lng})

    total = 0
    for _ in range(args.weeks):
        total += seed_week(base_url, args.lat, args.lng)

    print(f"Seed complete: {total} workouts created.")


if __name__ == "__main__":
    main()
