#!/usr/bin/env python3
"""
Seed script: creates a demo cycle covering the current quarter and opens it.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from perfreview.database import get_session_maker
from perfreview.services.cycles import close_cycle, create_cycle, open_cycle
from perfreview.storage.repositories import SqlReviewStore


def _quarter_bounds(today: date) -> tuple[date, date]:
    first_month = 3 * ((today.month - 1) // 3) + 1
    start = date(today.year, first_month, 1)
    if first_month == 10:
        end = date(today.year, 12, 31)
    else:
        end = date.fromordinal(date(today.year, first_month + 3, 1).toordinal() - 1)
    return start, end


async def seed():
    start, end = _quarter_bounds(date.today())
    title = f"Avaliação {start.year} T{(start.month - 1) // 3 + 1}"

    async with get_session_maker()() as session:
        store = SqlReviewStore(session)
        for cycle in await store.list_cycles():
            if cycle.title == title:
                print(f"Cycle '{title}' already exists ({cycle.status}).")
                return
        # Only one open cycle at a time for the demo
        for cycle in await store.list_cycles():
            if cycle.status == "open":
                await close_cycle(store, cycle.id)
                print(f"Closed previous cycle '{cycle.title}'.")

        cycle = await create_cycle(store, title, start, end)
        cycle = await open_cycle(store, cycle.id)
        await session.commit()

    print("Seed complete!")
    print(f"Cycle: {cycle.title} ({cycle.start_date} .. {cycle.end_date}) id={cycle.id}")
    print("Example: curl -X PUT http://localhost:8000/v1/cycles/" + cycle.id + "/evaluations/emp-1/self \\")
    print('  -H "Content-Type: application/json" \\')
    print('  -d \'{"evaluator_id":"emp-1","scores":{"comunicacao":3}}\'')


if __name__ == "__main__":
    asyncio.run(seed())
