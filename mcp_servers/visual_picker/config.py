from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_OVERLAY_ID = "__visual_picker_overlay"


def _env_float(name: str, default: float, *, low: float, high: float) -> float:
    try:
        value = float(os.environ.get(name) or default)
    except ValueError:
        value = default
    return max(low, min(value, high))


@dataclass
class PickerConfig:
    cdp_host: str = "127.0.0.1"
    cdp_port: int = 9222
    # Substring of a target id, url or title; empty picks the first page target.
    target_hint: str = ""
    cdp_timeout: float = 5.0
    pick_timeout: float = 120.0
    overlay_id: str = DEFAULT_OVERLAY_ID

    @property
    def http_endpoint(self) -> str:
        return f"http://{self.cdp_host}:{self.cdp_port}"

    @classmethod
    def from_env(cls) -> PickerConfig:
        host = (os.environ.get("MCP_PICKER_HOST") or "127.0.0.1").strip()
        try:
            port = int(os.environ.get("MCP_PICKER_PORT", "9222"))
        except ValueError:
            port = 9222
        return cls(
            cdp_host=host,
            cdp_port=port,
            target_hint=(os.environ.get("MCP_PICKER_TAB") or "").strip(),
            cdp_timeout=_env_float("MCP_PICKER_CDP_TIMEOUT", 5.0, low=0.5, high=60.0),
            pick_timeout=_env_float("MCP_PICKER_PICK_TIMEOUT", 120.0, low=1.0, high=3600.0),
            overlay_id=(os.environ.get("MCP_PICKER_OVERLAY_ID") or DEFAULT_OVERLAY_ID).strip(),
        )
