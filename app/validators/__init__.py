"""
app/validators package marker.
"""

from app.validators.cell_coercion import CellKind, RawCell, as_number, as_text, as_timestamp
from app.validators.ticket_row_parser import ParsedRow, TicketRowParser

__all__ = [
    "CellKind",
    "ParsedRow",
    "RawCell",
    "TicketRowParser",
    "as_number",
    "as_text",
    "as_timestamp",
]
