# Ingestion module - FAA feed access
from .http import HttpClient, HttpClientError, HttpStatusError, HttpTimeoutError, fetch_with_retry
from .faa_nasstatus import FAANASStatusClient, FeedParseError, delay_types, xml_to_tree

__all__ = [
    "HttpClient",
    "HttpClientError",
    "HttpStatusError",
    "HttpTimeoutError",
    "fetch_with_retry",
    "FAANASStatusClient",
    "FeedParseError",
    "delay_types",
    "xml_to_tree",
]
