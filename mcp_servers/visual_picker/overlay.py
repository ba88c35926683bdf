"""Page-side scripts: the click-capture overlay and the highlight box."""

from __future__ import annotations

import json
from typing import Any

HIGHLIGHT_SUFFIX = "__highlight"


def build_pick_js(overlay_id: str, timeout_ms: int) -> str:
    """Cover the viewport, resolve with the next click's page coordinates.

    Resolves ``null`` after ``timeout_ms``. The overlay is removed on both paths;
    a highlight box left by an earlier pick is removed up front.
    """
    overlay_id_json = json.dumps(overlay_id)
    return (
        "(() => new Promise((resolve) => {"
        f"  const id = {overlay_id_json};"
        "  const old = document.getElementById(id);"
        "  if (old) old.remove();"
        f"  const mark = document.getElementById(id + {json.dumps(HIGHLIGHT_SUFFIX)});"
        "  if (mark) mark.remove();"
        "  const overlay = document.createElement('div');"
        "  overlay.id = id;"
        "  overlay.style.position = 'fixed';"
        "  overlay.style.left = '0';"
        "  overlay.style.top = '0';"
        "  overlay.style.right = '0';"
        "  overlay.style.bottom = '0';"
        "  overlay.style.zIndex = '2147483647';"
        "  overlay.style.cursor = 'crosshair';"
        "  overlay.style.background = 'transparent';"
        "  let timer = null;"
        "  const finish = (value) => {"
        "    if (timer) clearTimeout(timer);"
        "    overlay.remove();"
        "    resolve(value);"
        "  };"
        "  overlay.addEventListener('click', (e) => {"
        "    e.preventDefault();"
        "    e.stopPropagation();"
        "    finish({ x: e.pageX, y: e.pageY });"
        "  }, { once: true });"
        f"  timer = setTimeout(() => finish(null), {max(0, int(timeout_ms))});"
        "  (document.body || document.documentElement).appendChild(overlay);"
        "}))()"
    )


def build_remove_js(element_id: str) -> str:
    return (
        "(() => {"
        f"  const el = document.getElementById({json.dumps(element_id)});"
        "  if (el) el.remove();"
        "  return true;"
        "})()"
    )


def build_highlight_js(
    element_id: str,
    box: dict[str, Any],
    label: str = "",
    *,
    border: str = "rgba(0, 160, 255, 0.95)",
    fill: str = "rgba(0, 160, 255, 0.15)",
) -> str:
    """Draw one non-interactive box at page coordinates, replacing any previous one."""
    id_json = json.dumps(element_id)
    box_json = json.dumps(box)
    label_json = json.dumps(label)
    return (
        "(() => {"
        f"  const id = {id_json};"
        "  const old = document.getElementById(id);"
        "  if (old) old.remove();"
        f"  const b = {box_json};"
        "  const el = document.createElement('div');"
        "  el.id = id;"
        "  el.style.position = 'absolute';"
        "  el.style.left = `${b.x}px`;"
        "  el.style.top = `${b.y}px`;"
        "  el.style.width = `${Math.max(0, b.width)}px`;"
        "  el.style.height = `${Math.max(0, b.height)}px`;"
        f"  el.style.outline = '1px solid {border}';"
        f"  el.style.background = '{fill}';"
        "  el.style.pointerEvents = 'none';"
        "  el.style.zIndex = '2147483647';"
        "  el.style.boxSizing = 'border-box';"
        f"  const label = {label_json};"
        "  if (label) {"
        "    const badge = document.createElement('div');"
        "    badge.textContent = label;"
        "    badge.style.position = 'absolute';"
        "    badge.style.left = '0';"
        "    badge.style.top = '-18px';"
        "    badge.style.padding = '1px 6px';"
        "    badge.style.fontSize = '11px';"
        "    badge.style.lineHeight = '14px';"
        "    badge.style.fontFamily = 'ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace';"
        "    badge.style.whiteSpace = 'nowrap';"
        "    badge.style.color = 'white';"
        f"    badge.style.background = '{border}';"
        "    el.appendChild(badge);"
        "  }"
        "  document.documentElement.appendChild(el);"
        "  return true;"
        "})()"
    )


__all__ = ["HIGHLIGHT_SUFFIX", "build_highlight_js", "build_pick_js", "build_remove_js"]
