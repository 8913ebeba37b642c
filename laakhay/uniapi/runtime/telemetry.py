"""Structured logging for request execution and pagination.

This module provides telemetry hooks for endpoint calls, emitting
structured logs for observability. Handlers are left to the application.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_request_executed(*, method: str, url: str, status: int, latency_ms: float) -> None:
    """Log a completed HTTP round trip.

    Args:
        method: HTTP method
        url: Request URL
        status: Response status code
        latency_ms: Round-trip latency in milliseconds
    """
    logger.debug(
        "request_executed",
        extra={"method": method, "url": url, "status": status, "latency_ms": latency_ms},
    )


def log_page_merged(*, path: str, page_index: int, items_total: int) -> None:
    """Log a page merged into the aggregate.

    Args:
        path: Endpoint path
        page_index: One-based index of the merged page (the first page is 1)
        items_total: List length of the aggregate after merging
    """
    logger.debug(
        "page_merged",
        extra={"path": path, "page_index": page_index, "items_total": items_total},
    )


def log_pagination_complete(*, path: str, pages: int, items_total: int | None) -> None:
    """Log the end of a paginated call.

    Args:
        path: Endpoint path
        pages: Number of pages fetched, the initial request included
        items_total: Final list length of the aggregate, if known
    """
    logger.info(
        "pagination_complete",
        extra={"path": path, "pages": pages, "items_total": items_total},
    )


def log_pagination_stopped(*, paginator: str, reason: str, **fields: object) -> None:
    """Log a paginator ending pagination for a reason other than exhaustion.

    Args:
        paginator: Paginator class name
        reason: Short reason code, e.g. ``"field_missing"`` or ``"stalled"``
        **fields: Additional context
    """
    logger.warning(
        "pagination_stopped",
        extra={"paginator": paginator, "reason": reason, **fields},
    )


def log_call_failed(*, method: str, path: str, page_index: int, error: BaseException) -> None:
    """Log an aborted call.

    Args:
        method: HTTP method
        path: Endpoint path
        page_index: One-based index of the page being fetched when it failed
        error: Exception that aborted the call
    """
    logger.error(
        "call_failed",
        extra={
            "method": method,
            "path": path,
            "page_index": page_index,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_call_cancelled(*, method: str, path: str, page_index: int) -> None:
    """Log a call whose task was cancelled mid-sequence."""
    logger.warning(
        "call_cancelled",
        extra={"method": method, "path": path, "page_index": page_index},
    )
