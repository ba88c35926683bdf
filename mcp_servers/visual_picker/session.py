"""
Tab discovery and the per-tab session wrapper.

Provides:
- list_targets / select_target: DevTools /json/list discovery
- PickerSession: CdpConnection wrapper with domain enabling and eval_js
- connect: open a session on the configured tab
"""

from __future__ import annotations

import logging
from typing import Any

from .config import PickerConfig
from .http_client import HttpClientError, http_get_json
from .session_cdp import CdpConnection

logger = logging.getLogger("mcp.visual_picker.session")


def cdp_ready(config: PickerConfig, timeout: float = 0.6) -> bool:
    """True when the DevTools HTTP endpoint answers."""
    try:
        version = http_get_json(f"{config.http_endpoint}/json/version", timeout=timeout)
    except HttpClientError:
        return False
    return isinstance(version, dict)


def list_targets(config: PickerConfig) -> list[dict[str, Any]]:
    data = http_get_json(f"{config.http_endpoint}/json/list", timeout=min(config.cdp_timeout, 5.0))
    if not isinstance(data, list):
        return []
    return [t for t in data if isinstance(t, dict)]


def select_target(targets: list[dict[str, Any]], hint: str = "") -> dict[str, Any] | None:
    """First inspectable page target, optionally filtered by id/url/title substring."""
    needle = (hint or "").strip().lower()
    for target in targets:
        if target.get("type") != "page" or not target.get("webSocketDebuggerUrl"):
            continue
        if str(target.get("url") or "").startswith("devtools://"):
            continue
        if not needle:
            return target
        haystack = " ".join(str(target.get(k) or "") for k in ("id", "url", "title")).lower()
        if needle in haystack:
            return target
    return None


class PickerSession:
    """CDP session for one tab."""

    def __init__(self, connection: Any, tab_id: str, tab_url: str = ""):
        self.conn = connection
        self.tab_id = tab_id
        self.tab_url = tab_url
        self._enabled: set[str] = set()

    def __enter__(self) -> PickerSession:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.conn.close()

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.conn.send(method, params)

    def enable(self, *domains: str) -> None:
        """Enable CDP domains once per session (``"DOM"``, ``"Page"``, ``"Runtime"``)."""
        for domain in domains:
            if domain in self._enabled:
                continue
            self.conn.send(f"{domain}.enable", {})
            self._enabled.add(domain)

    def eval_js(self, expression: str, *, timeout: float | None = None) -> Any:
        """Evaluate JavaScript (awaiting promises) and return the value.

        ``timeout`` temporarily overrides the CDP command timeout for this call.
        """
        self.enable("Runtime")

        old_timeout: float | None = None
        if timeout is not None:
            old_timeout = float(self.conn.timeout)
            self.conn.timeout = float(timeout)
        try:
            result = self.conn.send(
                "Runtime.evaluate",
                {"expression": expression, "returnByValue": True, "awaitPromise": True},
            )
        finally:
            if old_timeout is not None:
                self.conn.timeout = old_timeout

        if "exceptionDetails" in result:
            details = result.get("exceptionDetails") or {}
            text = (details.get("exception") or {}).get("description") or details.get("text") or "error"
            raise HttpClientError(f"JavaScript error: {text}")
        if "result" not in result:
            return None
        value = result["result"]
        # undefined and null both come back as None.
        if isinstance(value, dict) and value.get("type") == "undefined":
            return None
        if isinstance(value, dict) and value.get("type") == "object" and value.get("subtype") == "null":
            return None
        return value.get("value", value) if isinstance(value, dict) else value


def connect(config: PickerConfig) -> PickerSession:
    """Open a session on the inspected tab; the caller closes it."""
    target = select_target(list_targets(config), config.target_hint)
    if target is None:
        raise HttpClientError(f"No inspectable page target at {config.http_endpoint}")
    conn = CdpConnection(str(target["webSocketDebuggerUrl"]), timeout=config.cdp_timeout)
    session = PickerSession(conn, tab_id=str(target.get("id") or ""), tab_url=str(target.get("url") or ""))
    logger.debug("session open tab=%s url=%s", session.tab_id, session.tab_url)
    return session


__all__ = ["PickerSession", "cdp_ready", "connect", "list_targets", "select_target"]
