"""Query options for list and read calls.

Usage:
    service.list(include_fields("client_id", "name"), per_page(50))
"""
from __future__ import annotations
from typing import Any, Callable, Dict

RequestOption = Callable[[Dict[str, Any]], None]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def include_fields(*names: str) -> RequestOption:
    """Return only the named fields."""
    def apply(params: Dict[str, Any]) -> None:
        params["fields"] = ",".join(names)
        params["include_fields"] = "true"
    return apply


def exclude_fields(*names: str) -> RequestOption:
    """Return every field except the named ones."""
    def apply(params: Dict[str, Any]) -> None:
        params["fields"] = ",".join(names)
        params["include_fields"] = "false"
    return apply


def page(number: int) -> RequestOption:
    """Zero-based page index."""
    def apply(params: Dict[str, Any]) -> None:
        params["page"] = str(number)
    return apply


def per_page(count: int) -> RequestOption:
    def apply(params: Dict[str, Any]) -> None:
        params["per_page"] = str(count)
    return apply


def include_totals(enabled: bool = True) -> RequestOption:
    """Ask for the paged envelope (start, limit, length, total)."""
    def apply(params: Dict[str, Any]) -> None:
        params["include_totals"] = _flag(enabled)
    return apply


def parameter(key: str, value: Any) -> RequestOption:
    """Arbitrary query parameter, for filters without a dedicated helper."""
    def apply(params: Dict[str, Any]) -> None:
        params[key] = _flag(value) if isinstance(value, bool) else str(value)
    return apply


def apply_options(*options: RequestOption) -> Dict[str, Any]:
    """Fold options into a query parameter dict; later options win."""
    params: Dict[str, Any] = {}
    for option in options:
        option(params)
    return params
