# api_client.py - form-POST transport around requests.Session
from typing import Any, Mapping, Optional, Protocol

import requests

DEFAULT_TIMEOUT = 2.0


class Transport(Protocol):
    """Anything that can POST a form body to a URL and hand back the raw text."""

    def post(self, url: str, data: Mapping[str, Any]) -> str:
        ...


class HttpTransport:
    def __init__(self, timeout=DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        # the session's cookie jar carries the phpList login across calls
        self.session = session if session is not None else requests.Session()

    def post(self, url, data):
        resp = self.session.post(url, data=dict(data), timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    def close(self):
        self.session.close()
