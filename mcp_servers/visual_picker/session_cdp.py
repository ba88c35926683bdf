"""Raw CDP WebSocket connection."""

from __future__ import annotations

import json
import socket
import time
from contextlib import suppress
from typing import Any

import websocket

from .http_client import HttpClientError


class CdpConnection:
    """Low-level CDP WebSocket connection."""

    def __init__(self, ws_url: str, timeout: float = 5.0):
        try:
            self.ws = websocket.create_connection(ws_url, timeout=timeout)
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(f"CDP connect failed: {exc}") from exc
        self.ws_url = ws_url
        self.timeout = timeout
        self._next_id = 1

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send CDP command and wait for response."""
        msg_id = self._next_id
        self._next_id += 1

        msg: dict[str, Any] = {"id": msg_id, "method": method}
        if params:
            msg["params"] = params

        try:
            self.ws.settimeout(min(2.0, max(0.5, float(self.timeout))))
            self.ws.send(json.dumps(msg))
        except Exception as exc:  # noqa: BLE001
            raise HttpClientError(str(exc)) from exc

        return self._recv_until(msg_id)

    def _recv_until(self, expected_id: int) -> dict[str, Any]:
        """Wait for response with specific ID."""
        deadline = time.time() + self.timeout
        while True:
            remaining = deadline - time.time()
            if remaining <= 0:
                raise HttpClientError("CDP response timed out")

            # Short socket timeouts so the overall deadline is enforced here.
            try:
                self.ws.settimeout(min(0.5, remaining))
                raw = self.ws.recv()
            except websocket.WebSocketTimeoutException:
                continue
            except Exception as exc:  # noqa: BLE001
                msg = str(exc).lower()
                if isinstance(exc, TimeoutError) or "timed out" in msg:
                    continue
                raise HttpClientError(str(exc)) from exc

            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                continue

            if isinstance(data, dict) and isinstance(data.get("method"), str) and "id" not in data:
                # Domain events are not consumed by the picker.
                continue

            if isinstance(data, dict) and data.get("id") == expected_id:
                if "error" in data:
                    raise HttpClientError(str(data["error"]))
                return data.get("result", {})

    def close(self) -> None:
        """Close the connection by shutting down the raw socket."""
        # websocket-client close() can block on its handshake; the raw socket cannot.
        sock = getattr(self.ws, "sock", None)
        if sock is not None:
            with suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)
            with suppress(OSError):
                sock.close()


__all__ = ["CdpConnection"]
