"""
app/api/routers/ticket_rows.py

Paginated access to rows parsed from the last uploaded workbook.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import PageParams, get_application_filter, get_month_filter, get_page_params
from app.schemas.ticket_metrics import PagedTicketRowsResponse, TicketRowResponse
from app.services.ticket_query_service import TicketQueryService, get_ticket_query_service

router = APIRouter(prefix="/api/tickets", tags=["ticket-rows"])


@router.get("/rows", response_model=PagedTicketRowsResponse)
def get_ticket_rows(
    paging: PageParams = Depends(get_page_params),
    application: str | None = Depends(get_application_filter),
    month: str | None = Depends(get_month_filter),
    query_service: TicketQueryService = Depends(get_ticket_query_service),
) -> PagedTicketRowsResponse:
    """
    Return one page of parsed rows; empty items when nothing was uploaded yet.
    """

    result = query_service.query_rows(
        paging.page,
        paging.size,
        application=application,
        month=month,
    )
    return PagedTicketRowsResponse(
        page=result.page,
        size=result.size,
        total_items=result.total_items,
        total_pages=result.total_pages,
        items=[TicketRowResponse.model_validate(row) for row in result.items],
    )
