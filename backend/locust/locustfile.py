"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags concurrency  # Test overbooking
  locust -f locustfile.py --tags throughput   # Test read paths
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from locust import HttpUser, task, between, tag, events
from datetime import datetime, timezone, timedelta

# Shared state
EVENT_IDS = []
CONCURRENCY_EVENT_ID = None
CONCURRENCY_CAPACITY = 10
PASSWORD = "loadtest-password"


def random_email():
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"load_{suffix}@test.com"


def signup_and_login(client, role="participant"):
    """Create an account and return bearer headers, or {} when signup failed."""
    email = random_email()
    client.post("/api/auth/register", json={
        "email": email,
        "password": PASSWORD,
        "full_name": "Load Test User",
        "role": role,
    })
    resp = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    if resp.status_code != 200:
        return {}
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def future_window(days_ahead=30, hours=3):
    start = datetime.now(timezone.utc) + timedelta(days=days_ahead)
    return start.isoformat(), (start + timedelta(hours=hours)).isoformat()


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print(f"SETUP: first ConcurrencyUser creates an event with {CONCURRENCY_CAPACITY} seats")
    print("=" * 60)


class ConcurrencyUser(HttpUser):
    """
    TEST 1: Concurrency - 100 users -> 10 seats

    Run: locust -f locustfile.py --tags concurrency -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT COUNT(*) FROM registrations WHERE event_id = X AND status <> 'cancelled';
    Should be <= 10
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        global CONCURRENCY_EVENT_ID
        if CONCURRENCY_EVENT_ID is None:
            organizer_headers = signup_and_login(self.client, role="organizer")
            start, end = future_window()
            resp = self.client.post("/api/events/create",
                json={
                    "title": "Concurrency Test Event",
                    "description": f"{CONCURRENCY_CAPACITY} seats only, first come first served",
                    "location": "Main Hall",
                    "start_date": start,
                    "end_date": end,
                    "capacity": CONCURRENCY_CAPACITY,
                    "price": 0,
                    "category": "load-test",
                },
                headers=organizer_headers,
            )
            if resp.status_code == 201:
                CONCURRENCY_EVENT_ID = resp.json()["event"]["id"]
                print(f"\nCreated event {CONCURRENCY_EVENT_ID} with {CONCURRENCY_CAPACITY} seats\n")

        self.headers = signup_and_login(self.client)
        self.registered = False

    @tag("concurrency")
    @task
    def register_for_limited_event(self):
        """All users fight for the same seats."""
        if not CONCURRENCY_EVENT_ID or not self.headers or self.registered:
            return

        with self.client.post("/api/registrations/create",
            json={"event_id": CONCURRENCY_EVENT_ID, "ticket_type": "general", "amount_paid": 0},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                self.registered = True
                resp.success()
            elif resp.status_code == 400 and resp.json().get("reason") in ("capacity-exceeded", "already-registered"):
                resp.success()  # Expected: full, or our earlier request won
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - read paths

    Run: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s

    Compare:
      - Avg response time
      - Requests/sec
      - P95/P99 latency
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_events(self):
        resp = self.client.get("/api/events?limit=20", name="/api/events")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("throughput", "read")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            event_id = random.choice(EVENT_IDS)
            self.client.get(f"/api/events/{event_id}", name="/api/events/{id}")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = signup_and_login(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_event_id(self):
        with self.client.post("/api/registrations/create",
            json={"event_id": 999999, "ticket_type": "general"},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def negative_amount(self):
        with self.client.post("/api/registrations/create",
            json={"event_id": 1, "ticket_type": "general", "amount_paid": -5},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_ticket_type(self):
        with self.client.post("/api/registrations/create",
            json={"event_id": 1},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/registrations/create",
            data="not json at all",
            headers={**self.headers, "Content-Type": "application/json"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post("/api/registrations/create",
            json={"event_id": 1, "ticket_type": "general"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [401])

    @tag("edge")
    @task
    def participant_creates_event(self):
        start, end = future_window()
        with self.client.post("/api/events/create",
            json={
                "title": "Not allowed",
                "description": "Participants cannot create events",
                "location": "Nowhere",
                "start_date": start,
                "end_date": end,
                "capacity": 10,
                "category": "test",
            },
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [403])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing
      - Some registrations and inbox checks
      - Rare event creation by organizers
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.is_organizer = random.random() < 0.1
        self.headers = signup_and_login(self.client, role="organizer" if self.is_organizer else "participant")

    @task(50)
    def browse_events(self):
        resp = self.client.get("/api/events?limit=20", name="/api/events")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/events/{random.choice(EVENT_IDS)}", name="/api/events/{id}")

    @task(10)
    def register(self):
        if EVENT_IDS and self.headers:
            self.client.post("/api/registrations/create",
                json={"event_id": random.choice(EVENT_IDS), "ticket_type": "general", "amount_paid": 0},
                headers=self.headers,
                name="/api/registrations/create")

    @task(5)
    def check_inbox(self):
        if self.headers:
            self.client.get("/api/notifications", headers=self.headers)

    @task(3)
    def create_event(self):
        if self.headers and self.is_organizer:
            start, end = future_window(days_ahead=random.randint(1, 90))
            resp = self.client.post("/api/events/create",
                json={
                    "title": f"Event {random.randint(1, 10000)}",
                    "description": "Generated by the load test",
                    "location": "Venue",
                    "start_date": start,
                    "end_date": end,
                    "capacity": random.randint(10, 500),
                    "category": random.choice(["talk", "workshop", "social"]),
                },
                headers=self.headers)
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["event"]["id"])
