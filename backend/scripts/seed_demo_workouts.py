from datetime import timedelta
import random

from mapty.core.time_utils import utc_now
from mapty.db import SessionLocal, init_db
from mapty.models.activity import ActivityKind, build_activity
from mapty.services.kv_store import SqlKeyValueStore
from mapty.services.persistence import PersistenceAdapter

# Hyde Park, London
CENTER = (51.5073, -0.1657)


def jitter(center, spread_deg: float = 0.02):
    lat, lng = center
    return (
        round(lat + random.uniform(-spread_deg, spread_deg), 5),
        round(lng + random.uniform(-spread_deg, spread_deg), 5),
    )


def demo_workouts(weeks: int = 4):
    """A few weeks of demo workouts: Tue/Thu runs, Sat ride."""
    now = utc_now()
    start = now - timedelta(weeks=weeks)

    workouts = []
    for week in range(weeks):
        week_start = start + timedelta(weeks=week)
        for offset, kind in [(1, ActivityKind.running), (3, ActivityKind.running), (5, ActivityKind.cycling)]:
            when = week_start + timedelta(days=offset)
            if when > now:
                continue

            if kind is ActivityKind.running:
                distance = round(random.uniform(4.0, 12.0), 1)
                duration = round(distance * random.uniform(4.8, 6.2))
                extra = random.randint(165, 185)
            else:
                distance = round(random.uniform(20.0, 60.0), 1)
                duration = round(distance / random.uniform(22.0, 30.0) * 60)
                extra = random.randint(50, 600)

            workouts.append(
                build_activity(kind, jitter(CENTER), distance, duration, extra, created_at=when)
            )
    return workouts


def main():
    init_db()
    persistence = PersistenceAdapter(SqlKeyValueStore(SessionLocal))
    workouts = demo_workouts()
    # Replaces whatever was stored before
    persistence.save(workouts)
    print(f"Seeded {len(workouts)} demo workouts")


if __name__ == "__main__":
    main()
