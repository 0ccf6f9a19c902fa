r"""HTTP transport for fetching the sidebar source.

The transport never raises for HTTP or network failures. Every outcome is
returned as a :class:`TransportResult` so the controller can decide whether to
retry.

Example
-------
>>> from wiki_menu.transport import RequestsTransport
>>> transport = RequestsTransport("https://psychonautwiki.org")  # doctest: +SKIP
>>> result = transport.request("GET", "/wiki/MediaWiki:Sidebar?action=raw")  # doctest: +SKIP
>>> result.is_error  # doctest: +SKIP
False
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = "application/json"


@dc.dataclass(frozen=True, slots=True)
class TransportResult:
    """Outcome of a single request.

    Attributes
    ----------
    is_error : bool
        ``True`` for network failures, HTTP statuses of 400 and above, and
        JSON decode failures.
    payload : object
        Response text, decoded JSON, or the exception describing the failure.
    """

    is_error: bool
    payload: object


class Transport(typ.Protocol):
    """Anything that can perform a request and report its outcome."""

    def request(
        self,
        method: str,
        path: str,
        *,
        body: str | bytes | None = None,
        expect_json: bool = False,
    ) -> TransportResult: ...


class RequestsTransport:
    """Transport backed by a ``requests.Session`` rooted at a base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        connect_retries: int = 0,
    ) -> None:
        """Initialize the transport.

        Parameters
        ----------
        base_url : str
            Origin joined with every requested path.
        session : requests.Session, optional
            Preconfigured session to reuse connections. A new session with a
            mounted ``HTTPAdapter`` is created when omitted.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``DEFAULT_TIMEOUT``.
        connect_retries : int, optional
            Connection-level retries performed by urllib3 inside a single
            attempt. Defaults to ``0`` because the controller owns the retry
            budget.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=Retry(
                    total=connect_retries,
                    connect=connect_retries,
                    read=0,
                    status=0,
                    raise_on_status=False,
                )
            )
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self._session = session

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        body: str | bytes | None = None,
        expect_json: bool = False,
    ) -> TransportResult:
        """Perform ``method`` against ``path`` and describe the outcome.

        Parameters
        ----------
        method : str
            HTTP verb, e.g. ``"GET"``.
        path : str
            Path relative to ``base_url`` or an absolute URL.
        body : str or bytes, optional
            Request body.
        expect_json : bool, optional
            Send a JSON content type and decode the response as JSON.

        Returns
        -------
        TransportResult
            In text mode ``is_error`` is set for statuses of 400 and above and
            ``payload`` holds the raw body. In JSON mode a decode failure is an
            error whatever the status, with the decode exception as payload.
        """
        url = self.url_for(path)
        headers = {"Content-Type": _JSON_CONTENT_TYPE} if expect_json else {}
        try:
            response = self._session.request(
                method, url, data=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            return TransportResult(is_error=True, payload=exc)

        failed = response.status_code >= HTTPStatus.BAD_REQUEST
        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not expect_json:
            return TransportResult(is_error=failed, payload=response.text)

        try:
            payload = response.json()
        except (json.JSONDecodeError, requests.JSONDecodeError) as exc:
            return TransportResult(is_error=True, payload=exc)
        return TransportResult(is_error=failed, payload=payload)

    def close(self) -> None:
        self._session.close()


__all__ = ["RequestsTransport", "Transport", "TransportResult"]
