"""
Tests for serving many requests at once against one store
"""
import asyncio

import httpx

from app.infrastructure.store.repository import TimeEntryRepository
from app.main import create_app

# больше, чем потоков в пуле FastAPI (40)
CONCURRENT_READS = 60
CONCURRENT_TIMERS = 20


async def _burst(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        category = (await ac.post("/api/v1/categories/", json={
            "name": "Programming", "icon": "ri-code-line",
        })).json()
        activity = (await ac.post("/api/v1/activities/", json={
            "name": "React Course", "categoryId": category["id"],
        })).json()

        calls = [ac.get("/api/v1/categories/") for _ in range(CONCURRENT_READS)]
        calls += [
            ac.post("/api/v1/time-entries/", json={
                "activityId": activity["id"],
                "startTime": "2026-03-18T14:00:00",
                "active": True,
            })
            for _ in range(CONCURRENT_TIMERS)
        ]
        calls += [ac.get("/api/v1/stats/") for _ in range(CONCURRENT_READS)]
        return await asyncio.wait_for(asyncio.gather(*calls), timeout=30)


def test_concurrent_requests_all_complete(settings, store):
    app = create_app(settings, store=store)

    responses = asyncio.run(_burst(app))

    assert len(responses) == 2 * CONCURRENT_READS + CONCURRENT_TIMERS
    assert {r.status_code for r in responses} <= {200, 201}
    with store.session() as db:
        entries = TimeEntryRepository(db).list_all()
    assert len(entries) == CONCURRENT_TIMERS
    assert sum(1 for e in entries if e.active) == 1
