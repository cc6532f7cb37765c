"""
Load test for the Challenger scoring service.
Simulates a busy event: lots of competitors submitting results while
others refresh the leaderboard.
"""

import asyncio
import random
import time
import aiohttp
from dotenv import load_dotenv

load_dotenv()

from challenger import create_app

# -----------------------------
# CONFIG - ADJUST IF NEEDED
# -----------------------------
BASE_URL = "http://127.0.0.1:5000"

# User range (seed_demo.py profiles)
MIN_USER_ID = 1
MAX_USER_ID = 60

# Event to submit into (must be ACTIVE)
EVENT_ID = 1

# Rough plausible values per activity: (low, high)
VALUE_RANGES = {
    "squat": (60, 220),
    "bench": (40, 160),
    "deadlift": (80, 260),
    "rowing_500m": (85, 130),
    "rowing_4min": (900, 1300),
    "bike_4km": (330, 480),
    "ski_500m": (95, 140),
    "bike_500m": (40, 65),
}

# Total requests to send (roughly 1 in 5 is a leaderboard read)
TOTAL_REQUESTS = 2000

# How many run simultaneously
MAX_CONCURRENT = 100


def admin_cookie() -> str:
    """Signed session cookie with admin_ok, so submissions pass the edit check."""
    app = create_app()
    serializer = app.session_interface.get_signing_serializer(app)
    return serializer.dumps({"admin_ok": True})


# -----------------------------
# Load test functions
# -----------------------------
async def submit_score(session, user_id, activity_id):
    low, high = VALUE_RANGES[activity_id]
    payload = {
        "user_id": user_id,
        "activity_id": activity_id,
        "raw_value": round(random.uniform(low, high), 1),
        "event_id": EVENT_ID,
    }
    if activity_id in ("squat", "bench", "deadlift"):
        payload["reps"] = random.choice([1, 1, 1, 3, 5])

    try:
        async with session.post(f"{BASE_URL}/api/scores", json=payload) as resp:
            text = await resp.text()
            if resp.status != 200:
                print(f"[ERROR {resp.status}] {payload} :: {text[:200]}")
            return resp.status
    except Exception as e:
        print(f"[EXCEPTION] {e} :: {payload}")
        return None


async def fetch_leaderboard(session):
    try:
        async with session.get(f"{BASE_URL}/api/events/{EVENT_ID}/leaderboard") as resp:
            await resp.read()
            if resp.status != 200:
                print(f"[ERROR {resp.status}] leaderboard")
            return resp.status
    except Exception as e:
        print(f"[EXCEPTION] {e} :: leaderboard")
        return None


async def worker(name, session, task_queue):
    while True:
        item = await task_queue.get()
        if item is None:
            task_queue.task_done()
            break

        if item == "leaderboard":
            await fetch_leaderboard(session)
        else:
            user_id, activity_id = item
            await submit_score(session, user_id, activity_id)
        task_queue.task_done()


async def main():
    task_queue = asyncio.Queue()

    # Generate all simulated requests
    for _ in range(TOTAL_REQUESTS):
        if random.random() < 0.2:
            await task_queue.put("leaderboard")
            continue
        uid = random.randint(MIN_USER_ID, MAX_USER_ID)
        activity_id = random.choice(list(VALUE_RANGES))
        await task_queue.put((uid, activity_id))

    # Add sentinel None tasks to close workers
    for _ in range(MAX_CONCURRENT):
        await task_queue.put(None)

    cookies = {"session": admin_cookie()}
    async with aiohttp.ClientSession(cookies=cookies) as session:
        workers = [
            asyncio.create_task(worker(f"worker-{i}", session, task_queue))
            for i in range(MAX_CONCURRENT)
        ]

        print(f"Sending {TOTAL_REQUESTS} requests with concurrency {MAX_CONCURRENT}...")
        start = time.time()

        await task_queue.join()
        end = time.time()

        for w in workers:
            await w

        print(f"Completed in {end - start:.2f} seconds")


if __name__ == "__main__":
    asyncio.run(main())
