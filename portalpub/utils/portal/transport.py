#
# Copyright 2026 portalpub Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
HTTP transport for the Maven Central Portal.

Issues authenticated requests against the configured base URL and wraps the
answer in a PortalResponse. HTTP error statuses are returned, not raised:
the deployment client decides what each status means for each action.
Network failures are raised as TransportError.
"""

from typing import Any, Dict, List, Optional

import requests

from .errors import TransportError

# Default per-request timeout in seconds (uploads of large bundles included)
DEFAULT_TIMEOUT = 300


class PortalResponse:
    """Typed view over an HTTP response with a lazily decoded body."""

    def __init__(self, response: requests.Response):
        self._response = response
        self.status = response.status_code
        self.success = 200 <= self.status < 300
        self.headers = dict(response.headers or {})
        self._text = None

    def body(self) -> str:
        """Raw body as text, decoded on first access."""
        if self._text is None:
            self._text = self._response.text or ''
        return self._text

    def json(self) -> Any:
        """Body deserialized as JSON."""
        try:
            return self._response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response body (HTTP {self.status}): {e}") from e

    def __str__(self) -> str:
        return f"HttpResponse(status={self.status}, body={self.body()!r})"

    __repr__ = __str__


class PortalTransport:
    """Send requests to the Portal through a shared requests session."""

    def __init__(self,
                 base_url: str,
                 auth=None,
                 timeout: Optional[float] = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None,
                 verbose: bool = False):
        """
        Initialize the transport.

        Args:
            base_url: Portal base URL (e.g. https://central.sonatype.com/)
            auth: Authentication provider exposing apply(query, headers)
            timeout: Per-request timeout in seconds, None to wait forever
            session: Pre-built session (tests inject a mock here)
            verbose: Print every request line
        """
        self.base_url = base_url.rstrip('/')
        self.auth = auth
        self.timeout = timeout
        self.verbose = verbose
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create the HTTP session. Retries are left to the caller."""
        session = requests.Session()
        session.headers.update({'User-Agent': 'portalpub'})
        return session

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self,
                method: str,
                path: str,
                params: Optional[Dict[str, Any]] = None,
                files: Optional[Dict[str, Any]] = None,
                data: Any = None) -> PortalResponse:
        """
        Issue a single request.

        Args:
            method: HTTP method
            path: Path below the base URL
            params: Query parameters
            files: Multipart file parts, in requests' ``files`` format
            data: Raw body or form fields

        Returns:
            PortalResponse for any HTTP status
        """
        query: Dict[str, List[str]] = {}
        for key, value in (params or {}).items():
            query[key] = [str(value)]
        headers: Dict[str, str] = {}

        if self.auth is not None:
            self.auth.apply(query, headers)

        url = self.url(path)
        if self.verbose:
            print(f"\t{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                params=query or None,
                headers=headers,
                files=files,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        return PortalResponse(response)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
