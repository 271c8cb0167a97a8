"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fastapi import HTTPException, Query, status

from app.config import get_ticket_query_settings

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def get_month_filter(
    month: str | None = Query(default=None, description="Month in yyyy-MM format (e.g., 2024-07)"),
) -> str | None:
    """
    Validate the optional month filter; blank values mean no filter.
    """

    if month is None or not month.strip():
        return None
    if not MONTH_PATTERN.fullmatch(month):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid 'month' format. Expected yyyy-MM.",
        )
    return month


def get_application_filter(
    application: str | None = Query(default=None, description="Application name filter (case-insensitive)"),
) -> str | None:
    if application is None or not application.strip():
        return None
    return application


def get_page_params(
    page: int = Query(default=0, description="Zero-based page index"),
    size: int | None = Query(default=None, description="Page size (1..1000)"),
) -> PageParams:
    """
    Validate page bounds against the configured maximum page size.
    """

    settings = get_ticket_query_settings()
    effective_size = settings.default_page_size if size is None else size

    if page < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid 'page'. Must be >= 0.",
        )
    if effective_size < 1 or effective_size > settings.max_page_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid 'size'. Must be within 1..{settings.max_page_size}.",
        )
    return PageParams(page=page, size=effective_size)
