from __future__ import annotations

import json
from typing import Any
from urllib.error import URLError
from urllib.request import Request, urlopen


class HttpClientError(Exception):
    pass


def http_get_json(url: str, timeout: float = 2.0) -> Any:
    """Fetch JSON from a DevTools HTTP endpoint."""
    req = Request(url, headers={"User-Agent": "mcp-visual-picker/1.0"})
    try:
        with urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode())
    except (URLError, OSError) as e:
        raise HttpClientError(str(e)) from e
    except json.JSONDecodeError as e:
        raise HttpClientError(f"Invalid JSON from {url}: {e}") from e
