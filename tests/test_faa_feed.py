# tests/test_faa_feed.py
"""
Test FAA feed conversion and HTTP retry handling.

No network access: the single-request function is monkeypatched.
"""

import httpx
import pytest

from statusbot.ingestion import http
from statusbot.ingestion.faa_nasstatus import FAANASStatusClient, FeedParseError, delay_types, xml_to_tree
from statusbot.ingestion.http import HttpClientError, HttpStatusError, HttpTimeoutError, fetch_with_retry

from conftest import feed_xml, ground_delay_xml, ground_stop_xml

URL = "https://nasstatus.faa.gov/api/airport-status-information"


class TestXmlToTree:
    """Tests for XML -> dict conversion."""

    def test_single_delay_type(self):
        tree = xml_to_tree(feed_xml(ground_stop_xml()))
        entries = delay_types(tree)
        assert entries == [{
            "Name": "Ground Stop Programs",
            "Ground_Stop_List": {
                "Program": {"ARPT": "AAA", "Reason": "thunderstorms", "End_Time": "11:15 pm EDT"},
            },
        }]

    def test_repeated_elements_become_lists(self):
        xml = (
            "<AIRPORT_STATUS_INFORMATION><Delay_type><Name>Ground Stop Programs</Name><Ground_Stop_List>"
            "<Program><ARPT>AAA</ARPT></Program><Program><ARPT>BBB</ARPT></Program>"
            "</Ground_Stop_List></Delay_type></AIRPORT_STATUS_INFORMATION>"
        )
        programs = delay_types(xml_to_tree(xml))[0]["Ground_Stop_List"]["Program"]
        assert programs == [{"ARPT": "AAA"}, {"ARPT": "BBB"}]

    def test_attributes(self):
        xml = (
            "<AIRPORT_STATUS_INFORMATION><Delay_type><Name>Airspace Flow Programs</Name>"
            "<Airspace_Flow_List><Airspace_Flow><Circle Radius=\"4\">"
            "<Center Lat=\"39.86\" Long=\"-104.67\"/></Circle></Airspace_Flow></Airspace_Flow_List>"
            "</Delay_type></AIRPORT_STATUS_INFORMATION>"
        )
        flow = delay_types(xml_to_tree(xml))[0]["Airspace_Flow_List"]["Airspace_Flow"]
        assert flow["Circle"] == {"@_Radius": "4", "Center": {"@_Lat": "39.86", "@_Long": "-104.67"}}

    def test_multiple_delay_types(self):
        entries = delay_types(xml_to_tree(feed_xml(ground_stop_xml(), ground_delay_xml())))
        assert [entry["Name"] for entry in entries] == ["Ground Stop Programs", "Ground Delay Programs"]

    def test_no_delays(self):
        assert delay_types(xml_to_tree(feed_xml())) == []

    def test_malformed_xml(self):
        with pytest.raises(FeedParseError):
            xml_to_tree("<AIRPORT_STATUS_INFORMATION>")

    def test_wrong_root(self):
        with pytest.raises(FeedParseError):
            delay_types(xml_to_tree("<html><body/></html>"))


class TestFetchWithRetry:
    """Tests for retry and error mapping."""

    def _request(self):
        return httpx.Request("GET", URL)

    def test_success_after_timeout(self, monkeypatch):
        calls = []

        def flaky(url, method, params, headers, timeout):
            calls.append(url)
            if len(calls) == 1:
                raise httpx.ReadTimeout("timed out", request=self._request())
            return httpx.Response(200, text="<ok/>", request=self._request())

        monkeypatch.setattr(http, "_request_once", flaky)
        response = fetch_with_retry(URL, max_attempts=2)
        assert response.text == "<ok/>"
        assert len(calls) == 2

    def test_timeout_exhausted(self, monkeypatch):
        def always_timeout(url, method, params, headers, timeout):
            raise httpx.ReadTimeout("timed out", request=self._request())

        monkeypatch.setattr(http, "_request_once", always_timeout)
        with pytest.raises(HttpTimeoutError):
            fetch_with_retry(URL, max_attempts=1)

    def test_status_error(self, monkeypatch):
        def unavailable(url, method, params, headers, timeout):
            request = self._request()
            response = httpx.Response(503, request=request)
            raise httpx.HTTPStatusError("unavailable", request=request, response=response)

        monkeypatch.setattr(http, "_request_once", unavailable)
        with pytest.raises(HttpStatusError) as excinfo:
            fetch_with_retry(URL, max_attempts=1)
        assert excinfo.value.status_code == 503

    def test_client_error_not_retried(self, monkeypatch):
        calls = []

        def missing(url, method, params, headers, timeout):
            calls.append(url)
            request = self._request()
            raise httpx.HTTPStatusError("missing", request=request, response=httpx.Response(404, request=request))

        monkeypatch.setattr(http, "_request_once", missing)
        with pytest.raises(HttpStatusError) as excinfo:
            fetch_with_retry(URL, max_attempts=3)
        assert excinfo.value.status_code == 404
        assert len(calls) == 1

    def test_server_error_retried(self, monkeypatch):
        calls = []

        def recovering(url, method, params, headers, timeout):
            calls.append(url)
            request = self._request()
            if len(calls) == 1:
                raise httpx.HTTPStatusError("busy", request=request, response=httpx.Response(502, request=request))
            return httpx.Response(200, text="<ok/>", request=request)

        monkeypatch.setattr(http, "_request_once", recovering)
        assert fetch_with_retry(URL, max_attempts=2).text == "<ok/>"
        assert len(calls) == 2

    def test_transport_error_not_retried(self, monkeypatch):
        calls = []

        def refused(url, method, params, headers, timeout):
            calls.append(url)
            raise httpx.ConnectError("refused", request=self._request())

        monkeypatch.setattr(http, "_request_once", refused)
        with pytest.raises(HttpClientError):
            fetch_with_retry(URL, max_attempts=3)
        assert len(calls) == 1


class TestFAANASStatusClient:
    """Tests for the feed client."""

    def test_user_agent_and_tree(self, monkeypatch):
        seen = {}

        def fake(url, method, params, headers, timeout):
            seen["url"] = url
            seen["headers"] = headers
            return httpx.Response(200, text=feed_xml(ground_stop_xml()), request=self._request())

        monkeypatch.setattr(http, "_request_once", fake)
        client = FAANASStatusClient(user_agent="AirportStatusBot/test")
        tree = client.fetch_tree()

        assert seen["url"] == URL
        assert seen["headers"]["User-Agent"] == "AirportStatusBot/test"
        assert delay_types(tree)[0]["Name"] == "Ground Stop Programs"

    def _request(self):
        return httpx.Request("GET", URL)
