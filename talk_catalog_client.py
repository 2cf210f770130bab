"""Talk catalog API client.

This module defines a small client wrapper around the Talk Catalog REST
API using the ``requests`` library.  It exposes one method per
endpoint:

* :meth:`TalkCatalogAPI.list_endpoints` – discovery listing of routes.
* :meth:`TalkCatalogAPI.register` – create an account.
* :meth:`TalkCatalogAPI.login` – exchange credentials for a token.
* :meth:`TalkCatalogAPI.top_ten_views` – the ten most viewed talks.
* :meth:`TalkCatalogAPI.get_talk` – a single talk by its identifier.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with ``status_code`` and ``message`` keys.

After a successful :meth:`register` or :meth:`login` the client keeps
the returned access token and sends it in the ``Authorization`` header
of subsequent requests.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"

Error = Dict[str, Any]


class TalkCatalogAPI:
    """Client for interacting with the Talk Catalog API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API.  Defaults to the
                ``TALK_CATALOG_BASE_URL`` environment variable, then
                ``http://localhost:8080``.
            access_token: Token from an earlier login, if any.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        base_url = base_url or os.getenv("TALK_CATALOG_BASE_URL", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def logout(self) -> None:
        """Forget the stored access token.  The token stays valid server side."""
        self.access_token = None

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/login``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module
            docstring.  Error messages are taken from the API's
            ``response`` or ``error`` field when present.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = self.access_token
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("response") or err_json.get("error") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": str(message)}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def list_endpoints(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", "/")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def _authenticate(self, path: str, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("POST", path, json_body={"username": username, "password": password})
        if error:
            return None, error
        account = (data or {}).get("response")
        if not isinstance(account, dict):
            return None, {"status_code": None, "message": "Unexpected response from server"}
        self.access_token = account.get("accessToken")
        return account, None

    def register(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create an account and keep its access token.

        Returns:
            A tuple ``(account, error)`` where ``account`` holds
            ``username``, ``id`` and ``accessToken``.
        """
        return self._authenticate("/register", username, password)

    def login(self, username: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log in and keep the account's access token."""
        return self._authenticate("/login", username, password)

    def top_ten_views(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve the ten most viewed talks, highest first."""
        data, error = self._request("GET", "/top10Views")
        if error:
            return [], error
        talks = (data or {}).get("body")
        return talks if isinstance(talks, list) else [], None

    def get_talk(self, talk_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single talk by its ``talk_id``."""
        data, error = self._request("GET", f"/speaker/{talk_id}")
        if error:
            return None, error
        return (data or {}).get("body"), None
