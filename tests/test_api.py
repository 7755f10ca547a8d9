# tests/test_api.py
"""
Test the status API.
"""

from fastapi.testclient import TestClient

from statusbot.cycle import StatusCycle
from statusbot.main import build_cycle, create_app
from statusbot.reference.naturalearth import NaturalEarthDataManager
from statusbot.settings import settings

from conftest import closure_xml, feed_xml, ground_delay_xml


def client_for(cycle):
    return TestClient(create_app(cycle=cycle, start_polling=False))


class TestStatusEndpoint:
    """Tests for GET /status."""

    def test_before_first_run(self, generator):
        cycle = StatusCycle(generator, lambda: feed_xml())
        response = client_for(cycle).get("/status")
        assert response.status_code == 200
        assert response.json() == {"lastSuccessfulRun": None}

    def test_after_run(self, generator, now):
        cycle = StatusCycle(generator, lambda: feed_xml())
        cycle.run(now)
        body = client_for(cycle).get("/status").json()
        assert body["lastSuccessfulRun"].startswith("2024-08-26T18:00:00")

    def test_no_cycle(self):
        response = TestClient(create_app(cycle=None, start_polling=False)).get("/status")
        assert response.status_code == 503


class TestDelaysEndpoint:
    """Tests for GET /delays."""

    def test_not_ready(self, generator):
        cycle = StatusCycle(generator, lambda: feed_xml())
        assert client_for(cycle).get("/delays").status_code == 503

    def test_closures_excluded(self, generator, now):
        cycle = StatusCycle(generator, lambda: feed_xml(ground_delay_xml(), closure_xml()))
        cycle.run(now)
        body = client_for(cycle).get("/delays").json()
        assert body == {
            "count": 1,
            "delays": [
                "Inbound aircraft to Test Airport A (#AAA) are currently being delayed at their origin airport "
                "due to low ceilings. Delays are currently averaging 55 minutes and are up to 3 hours.",
            ],
        }


class TestBuildCycle:
    """Tests for wiring the default cycle."""

    def test_reference_refresh_deferred_to_poller(self, monkeypatch, tmp_path):
        calls = []

        def fake_update_cache(self, force=False):
            calls.append(self)
            return False

        monkeypatch.setattr(NaturalEarthDataManager, "update_cache", fake_update_cache)
        monkeypatch.setattr(settings, "snapshot_path", str(tmp_path / "previous.xml"))
        monkeypatch.setattr(settings, "post_on_first_run", False)

        cycle = build_cycle()
        assert calls == []
        assert cycle.post_on_first_run is False

        assert cycle.refresh_reference() is False
        assert len(calls) == 1
