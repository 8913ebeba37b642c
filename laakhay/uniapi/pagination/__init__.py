"""Pagination strategies."""

from .base import Paginator
from .cursor import CursorPaginator
from .page_number import PageNumberPaginator
from .skip_limit import SkipLimitPaginator

__all__ = [
    "Paginator",
    "SkipLimitPaginator",
    "CursorPaginator",
    "PageNumberPaginator",
]
