from __future__ import annotations

import json
import unittest

from cssdts.errors import SourceMapError
from cssdts.source_map import OriginalPosition, Position, SourceMapIndex, decode_vlq


def make_map(mappings: str, **extra: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "version": 3,
        "sources": ["styles.scss"],
        "names": [],
        "mappings": mappings,
    }
    payload.update(extra)
    return payload


class VLQTests(unittest.TestCase):
    def test_decodes_single_digits(self) -> None:
        self.assertEqual(decode_vlq("A"), [0])
        self.assertEqual(decode_vlq("C"), [1])
        self.assertEqual(decode_vlq("D"), [-1])
        self.assertEqual(decode_vlq("CAIA"), [1, 0, 4, 0])

    def test_decodes_continuation(self) -> None:
        self.assertEqual(decode_vlq("gB"), [16])

    def test_rejects_invalid_character(self) -> None:
        with self.assertRaises(SourceMapError) as ctx:
            decode_vlq("A!")
        self.assertEqual(ctx.exception.code, "MAP003")

    def test_rejects_truncated_segment(self) -> None:
        with self.assertRaises(SourceMapError) as ctx:
            decode_vlq("g")
        self.assertEqual(ctx.exception.code, "MAP003")


class SourceMapIndexTests(unittest.TestCase):
    def test_maps_generated_line_to_original_line(self) -> None:
        index = SourceMapIndex(make_map(";;CAIA"))
        result = index.original_position_for(Position(line=3, column=1))
        self.assertEqual(result, OriginalPosition(source="styles.scss", line=5, column=0))

    def test_uses_closest_mapping_before_column(self) -> None:
        index = SourceMapIndex(make_map("AAAA,KAEA"))
        self.assertEqual(index.original_position_for(Position(1, 3)).line, 1)
        self.assertEqual(index.original_position_for(Position(1, 5)).line, 3)
        self.assertEqual(index.original_position_for(Position(1, 9)).line, 3)

    def test_unmapped_positions_return_sentinel(self) -> None:
        index = SourceMapIndex(make_map(";EAAA"))
        self.assertIsNone(index.original_position_for(Position(1, 0)).line)
        self.assertIsNone(index.original_position_for(Position(2, 1)).line)
        self.assertIsNone(index.original_position_for(Position(7, 0)).line)
        self.assertEqual(index.original_position_for(Position(2, 2)).line, 1)

    def test_single_field_segment_has_no_original_line(self) -> None:
        index = SourceMapIndex(make_map("A"))
        self.assertEqual(index.original_position_for(Position(1, 0)), OriginalPosition())

    def test_fields_accumulate_across_lines(self) -> None:
        # line 1 -> original line 3, line 2 -> original line 3 + 1
        index = SourceMapIndex(make_map("AAEA;AACA"))
        self.assertEqual(index.original_position_for(Position(1, 0)).line, 3)
        self.assertEqual(index.original_position_for(Position(2, 0)).line, 4)

    def test_resolves_names_and_source_root(self) -> None:
        index = SourceMapIndex(make_map("AAAAA", names=["foo"], sourceRoot="src/"))
        result = index.original_position_for(Position(1, 0))
        self.assertEqual(result.name, "foo")
        self.assertEqual(result.source, "src/styles.scss")

    def test_accepts_json_text_with_xssi_guard(self) -> None:
        text = ")]}'\n" + json.dumps(make_map(";;CAIA"))
        index = SourceMapIndex(text)
        self.assertEqual(index.original_position_for(Position(3, 1)).line, 5)
        self.assertEqual(len(index.mappings()), 1)

    def test_rejects_bad_payloads(self) -> None:
        cases = [
            (make_map("AAAA", version=2), "MAP001"),
            ({"version": 3, "sections": []}, "MAP002"),
            (make_map("AA"), "MAP003"),
            ({"version": 3, "sources": []}, "MAP004"),
            ("{not json", "MAP005"),
            (make_map("ACAA"), "MAP007"),
        ]
        for payload, code in cases:
            with self.subTest(code=code):
                with self.assertRaises(SourceMapError) as ctx:
                    SourceMapIndex(payload)
                self.assertEqual(ctx.exception.code, code)

    def test_rejects_non_positive_line(self) -> None:
        index = SourceMapIndex(make_map("AAAA"))
        with self.assertRaises(SourceMapError) as ctx:
            index.original_position_for(Position(0, 0))
        self.assertEqual(ctx.exception.code, "MAP006")


if __name__ == "__main__":
    unittest.main()
