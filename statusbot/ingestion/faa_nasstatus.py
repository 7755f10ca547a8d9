# statusbot/ingestion/faa_nasstatus.py
"""
FAA National Airspace System (NAS) Status feed.

Source: https://nasstatus.faa.gov/api/airport-status-information

The feed is XML rooted at AIRPORT_STATUS_INFORMATION with one Delay_type
element per category:
- Ground Stop Programs
- Ground Delay Programs
- Airport Closures
- General Arrival/Departure Delay Info
- Airspace Flow Programs

The XML is converted to a plain tree (dicts, lists, strings) that the
status parser walks:
- attributes become "@_<name>" keys
- repeated child elements become lists
- text-only elements become strings; mixed ones keep text under "#text"
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from .http import HttpClient, HttpClientError
from ..logging import get_ingestion_logger

logger = get_ingestion_logger("faa_nasstatus")

FAA_NAS_API_URL = "https://nasstatus.faa.gov/api/airport-status-information"
ROOT_TAG = "AIRPORT_STATUS_INFORMATION"


class FeedParseError(HttpClientError):
    """Raised when the feed body is not the expected XML document."""
    pass


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    attributes = {f"@_{key}": value for key, value in element.attrib.items()}
    text = (element.text or "").strip()

    if not children and not attributes:
        return text

    node: Dict[str, Any] = dict(attributes)
    for child in children:
        value = _element_to_value(child)
        if child.tag in node:
            existing = node[child.tag]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[child.tag] = [existing, value]
        else:
            node[child.tag] = value

    if text:
        node["#text"] = text
    return node


def xml_to_tree(xml_text: str) -> Dict[str, Any]:
    """
    Convert an XML document to a nested dict keyed by the root tag.

    Raises:
        FeedParseError: If the text is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise FeedParseError(f"Failed to parse FAA XML: {e}")
    return {root.tag: _element_to_value(root)}


def delay_types(tree: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Delay_type entries of a parsed feed, always as a list.

    Raises:
        FeedParseError: If the tree is not an AIRPORT_STATUS_INFORMATION document
    """
    if ROOT_TAG not in tree:
        raise FeedParseError(f"Missing {ROOT_TAG} root element")

    root = tree[ROOT_TAG]
    if not isinstance(root, dict):
        return []

    entries = root.get("Delay_type") or []
    if isinstance(entries, dict):
        entries = [entries]
    return [entry for entry in entries if isinstance(entry, dict)]


class FAANASStatusClient:
    """
    Client for the FAA NAS Status feed.

    Usage:
        client = FAANASStatusClient(user_agent="AirportStatusBot/0.1.0")
        entries = delay_types(client.fetch_tree())
    """

    def __init__(self, url: str = FAA_NAS_API_URL, timeout: float = 10.0, user_agent: Optional[str] = None):
        self.url = url
        headers = {"User-Agent": user_agent} if user_agent else None
        self.client = HttpClient(timeout=timeout, headers=headers)

    def fetch_xml(self) -> str:
        """Download the raw XML document."""
        text = self.client.get_text(self.url)
        logger.debug("feed_fetched", url=self.url, size=len(text))
        return text

    def fetch_tree(self) -> Dict[str, Any]:
        """Download and convert the feed."""
        return xml_to_tree(self.fetch_xml())
