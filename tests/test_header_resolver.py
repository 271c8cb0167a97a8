from __future__ import annotations

import unittest

from app.domain.ticket_metrics import HeaderMap, LogicalField
from app.mappers.header_resolver import HeaderResolver
from app.validators.cell_coercion import RawCell


class TestHeaderResolver(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = HeaderResolver()

    def test_identifier_matches_case_insensitively(self) -> None:
        for header in ("ID", "id", "Id", "  iD  "):
            with self.subTest(header=header):
                header_map = self.resolver.resolve_names([header])
                self.assertEqual(header_map.column_for(LogicalField.IDENTIFIER), 0)

    def test_resolves_every_field_from_aliases(self) -> None:
        header_map = self.resolver.resolve_names(
            ["Ticket_ID", "Created Date", "Date Resolved", "SLA", "App", "Severity"]
        )

        self.assertEqual(header_map.column_for(LogicalField.IDENTIFIER), 0)
        self.assertEqual(header_map.column_for(LogicalField.CREATED_AT), 1)
        self.assertEqual(header_map.column_for(LogicalField.RESOLVED_AT), 2)
        self.assertEqual(header_map.column_for(LogicalField.SLA_TARGET_HOURS), 3)
        self.assertEqual(header_map.column_for(LogicalField.APPLICATION), 4)
        self.assertEqual(header_map.column_for(LogicalField.PRIORITY), 5)

    def test_missing_header_row_leaves_everything_unresolved(self) -> None:
        header_map = self.resolver.resolve(None)

        self.assertEqual(header_map, HeaderMap.unresolved())
        for logical_field in LogicalField:
            self.assertFalse(header_map.is_resolved(logical_field))

    def test_duplicate_header_resolves_to_leftmost_column(self) -> None:
        header_map = self.resolver.resolve_names(["id", "created_at", "ID"])

        self.assertEqual(header_map.column_for(LogicalField.IDENTIFIER), 0)

    def test_earlier_alias_wins_over_earlier_column(self) -> None:
        header_map = self.resolver.resolve_names(["number", "id"])

        self.assertEqual(header_map.column_for(LogicalField.IDENTIFIER), 1)

    def test_no_fuzzy_matching(self) -> None:
        header_map = self.resolver.resolve_names(["Identifier", "Created-At", "resolvedat"])

        self.assertFalse(header_map.is_resolved(LogicalField.IDENTIFIER))
        self.assertFalse(header_map.is_resolved(LogicalField.CREATED_AT))
        self.assertFalse(header_map.is_resolved(LogicalField.RESOLVED_AT))

    def test_blank_and_non_text_header_cells_are_skipped(self) -> None:
        cells = [
            RawCell.from_value(None),
            RawCell.from_value(2024),
            RawCell.from_value("Resolved"),
        ]

        header_map = self.resolver.resolve(cells)

        self.assertEqual(header_map.column_for(LogicalField.RESOLVED_AT), 2)
        self.assertFalse(header_map.is_resolved(LogicalField.CREATED_AT))

    def test_custom_alias_table(self) -> None:
        resolver = HeaderResolver(aliases={LogicalField.IDENTIFIER: ("Case Ref",)})

        header_map = resolver.resolve_names(["case ref", "id"])

        self.assertEqual(header_map.column_for(LogicalField.IDENTIFIER), 0)
        self.assertFalse(header_map.is_resolved(LogicalField.CREATED_AT))

    def test_as_dict_lists_all_fields(self) -> None:
        header_map = self.resolver.resolve_names(["created"])

        self.assertEqual(
            header_map.as_dict(),
            {
                "identifier": None,
                "created_at": 0,
                "resolved_at": None,
                "priority": None,
                "sla_target_hours": None,
                "application": None,
            },
        )


if __name__ == "__main__":
    unittest.main()
