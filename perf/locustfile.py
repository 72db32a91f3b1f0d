"""Locust load script for the last-videos addon.
Usage:
  locust -f perf/locustfile.py --host http://localhost:3000
"""
import os
from locust import HttpUser, task, between

LAST_VIDEOS_IDS = os.getenv("LAST_VIDEOS_IDS", "tt7772588,kitsu:44081")


class StremioUser(HttpUser):
    wait_time = between(0.2, 1.0)

    @task(1)
    def manifest(self):
        self.client.get("/manifest.json")

    @task(3)
    def last_videos(self):
        self.client.get(
            f"/catalog/series/last-videos/lastVideosIds={LAST_VIDEOS_IDS}.json",
            name="/catalog/series/last-videos/[ids]",
        )

    @task(3)
    def movie_stream(self):
        self.client.get("/stream/movie/tt1254207.json")

    @task(1)
    def unknown_stream(self):
        # Empty stream list, still a 200
        self.client.get("/stream/series/tt0000000:1:1.json", name="/stream/series/[unknown]")
