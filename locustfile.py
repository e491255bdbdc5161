import random

from locust import HttpUser, between, task

RANGES = ["7days", "30days", "month", "3months", "year"]


class DashboardUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    @task(5)
    def dashboard_summary(self):
        """
        The dashboard landing view: counters, revenue comparison and trend.
        """
        self.client.get(
            "/api/v1/analytics/summary",
            params={"range": random.choice(RANGES)},
            name="/api/v1/analytics/summary"  # Group all ranges under this name in the stats
        )

    @task(2)
    def report(self):
        self.client.get(
            "/api/v1/analytics/report",
            params={"range": random.choice(RANGES)},
            name="/api/v1/analytics/report"
        )

    @task(1)
    def trend(self):
        self.client.get(
            "/api/v1/analytics/trend",
            params={"period": random.choice(["weekly", "monthly"]), "count": 6},
            name="/api/v1/analytics/trend"
        )

    @task(1)
    def top_cars(self):
        self.client.get("/api/v1/analytics/top-cars", params={"limit": 10})
