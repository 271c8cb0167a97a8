"""
app/api/routers/ticket_upload.py

Ticket workbook upload endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.domain.errors import UnparseableWorkbookError, UploadValidationError
from app.schemas.ticket_metrics import TicketMetricsResponse
from app.services.ticket_ingestion_service import TicketIngestionService, get_ticket_ingestion_service

router = APIRouter(prefix="/api/tickets", tags=["ticket-upload"])


@router.post("/upload", response_model=TicketMetricsResponse)
def upload_ticket_workbook(
    file: UploadFile = File(...),
    ingestion_service: TicketIngestionService = Depends(get_ticket_ingestion_service),
) -> TicketMetricsResponse:
    """
    Ingest one .xlsx workbook of tickets and return its computed metrics.
    """

    try:
        content = file.file.read()
        summary = ingestion_service.ingest(
            content,
            file.content_type,
            file.filename,
            file.size if file.size is not None else len(content),
        )
    except UploadValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.message,
        ) from exc
    except UnparseableWorkbookError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.message,
        ) from exc
    finally:
        file.file.close()

    return TicketMetricsResponse(
        total_tickets=summary.total_tickets,
        sla_adherence_percent=summary.sla_adherence_percent,
        mttr_hours=summary.mttr_hours,
        remarks=summary.remarks,
        details=list(summary.details),
    )
