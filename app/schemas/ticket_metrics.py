"""
app/schemas/ticket_metrics.py

Response schemas for ticket upload, metrics and row endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TicketMetricsResponse(BaseModel):
    """
    API response model for the summary of one uploaded workbook.
    """

    total_tickets: int = Field(..., ge=0)
    sla_adherence_percent: float = Field(..., ge=0.0, le=100.0)
    mttr_hours: float = Field(..., ge=0.0)
    remarks: str
    details: list[str] = Field(default_factory=list)


class TicketMetricEntryResponse(BaseModel):
    """
    API response model for one stored metrics entry.
    """

    model_config = ConfigDict(from_attributes=True)

    application: str | None = None
    month: str | None = None
    total_tickets: int = Field(..., ge=0)
    sla_adherence_percent: float = Field(..., ge=0.0, le=100.0)
    mttr_hours: float = Field(..., ge=0.0)


class TicketMetricsReportResponse(BaseModel):
    """
    API response model for the monthly reporting shape of a metrics entry.
    """

    model_config = ConfigDict(from_attributes=True)

    application: str | None = None
    month: str | None = Field(default=None, description="Full month name, e.g. 'September'")
    no_of_tickets_received: int = Field(..., ge=0)
    no_of_tickets_responded_by_tel: int | None = None
    mttr_respond_min: int | None = None
    adherence_to_response_sla: str | None = None
    slipped_response_sla: int | None = None
    response_adherence_rate: str | None = None
    no_of_tickets_resolved_by_tel: int | None = None
    mttr_resolve_min: int = Field(..., ge=0)
    adherence_to_resolution_sla: str
    slipped_resolution_sla: int | None = None
    resolution_adherence_rate: str
    remarks: str | None = None
    resolution_remarks: str | None = None


class TicketRowResponse(BaseModel):
    """
    API response model for one parsed ticket row.
    """

    model_config = ConfigDict(from_attributes=True)

    identifier: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    application: str | None = None
    priority: str | None = None
    sla_target_hours: float | None = None
    response_minutes: int = 0
    resolve_minutes: int = Field(default=0, ge=0)
    response_sla_percent: int = 0
    resolution_sla_percent: int = Field(default=0, ge=0, le=100)
    month: str | None = None


class PagedTicketRowsResponse(BaseModel):
    """
    API response model for one page of parsed ticket rows.
    """

    page: int = Field(..., ge=0)
    size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    items: list[TicketRowResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    dataset_version: int = Field(..., ge=0)
