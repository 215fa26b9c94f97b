from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_REMOTE_TIMEOUT_SECONDS
from ..core.enums import RemoteAction

logger = logging.getLogger(__name__)


class SheetsClient:
    """HTTP client for the spreadsheet script endpoint.

    Reads return ``None`` on any failure ("no data this cycle"); writes swallow
    failures after logging them. A missing or non-http URL turns every call
    into a no-op.
    """

    def __init__(
        self,
        script_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT_SECONDS,
    ):
        self._script_url = (script_url or "").strip()
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return self._script_url.startswith("http")

    def fetch(self, action: RemoteAction) -> Optional[Any]:
        if not self.configured:
            return None
        try:
            resp = self._session.get(
                self._script_url,
                params={"action": action.value},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            if not resp.ok:
                logger.warning("remote %s failed: HTTP %s", action.value, resp.status_code)
                return None
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("remote %s failed: %s", action.value, e)
            return None

    def push(self, action: RemoteAction, data: dict) -> None:
        if not self.configured:
            return
        try:
            self._session.post(
                self._script_url,
                data=json.dumps({"action": action.value, "data": data}, ensure_ascii=False).encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("push %s failed, next pull will reconcile: %s", action.value, e)
