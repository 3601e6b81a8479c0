"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Dict, Tuple

from flask import request

PAGINATION_SIZES: Tuple[int, ...] = (25, 50, 100)


def get_per_page(param: str = "per_page", default: int = 25) -> int:
    """Return a validated per-page value from the query string.

    Falls back to ``default`` (or the smallest size) when the parameter is
    missing or not one of :data:`PAGINATION_SIZES`.
    """

    value = request.args.get(param, type=int)
    if value in PAGINATION_SIZES:
        return value
    if default in PAGINATION_SIZES:
        return default
    return PAGINATION_SIZES[0]


def build_pagination_args(per_page: int, **extra: str) -> Dict[str, str]:
    """Assemble arguments for pagination links, dropping empty filters."""

    args = {key: value for key, value in extra.items() if value}
    args["per_page"] = str(per_page)
    return args
