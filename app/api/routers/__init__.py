"""
app/api/routers package marker.
"""

from app.api.routers.ticket_metrics import router as ticket_metrics_router
from app.api.routers.ticket_rows import router as ticket_rows_router
from app.api.routers.ticket_upload import router as ticket_upload_router

__all__ = [
    "ticket_metrics_router",
    "ticket_rows_router",
    "ticket_upload_router",
]
