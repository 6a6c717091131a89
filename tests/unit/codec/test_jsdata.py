"""JavaScript data-literal parsing and rendering.

Only the literal subset used by search-index files is supported; anything
else must fail as an index load error rather than being evaluated.
"""

from __future__ import annotations

import unittest

from doxindex.codec import jsdata
from doxindex.errors import IndexLoadError


class JsDataParseTests(unittest.TestCase):
    def test_parse_assignments_reads_arrays_objects_and_scalars(self) -> None:
        text = """
        // generated file
        var searchData=
        [
          ['fix',['fix',['../a.html#a1',1,'NumCpp::Methods']]]
        ];
        /* section table */
        var indexSectionNames =
        {
          0: "all",
          1: "functions"
        };
        var misc = [true, false, null, -2, 0.5];
        """
        assignments = jsdata.parse_assignments(text)

        self.assertEqual(assignments["searchData"], [["fix", ["fix", ["../a.html#a1", 1, "NumCpp::Methods"]]]])
        self.assertEqual(assignments["indexSectionNames"], {0: "all", 1: "functions"})
        self.assertEqual(assignments["misc"], [True, False, None, -2, 0.5])

    def test_trailing_commas_are_accepted(self) -> None:
        self.assertEqual(jsdata.parse_literal("[1, 2, [3,],]"), [1, 2, [3]])
        self.assertEqual(jsdata.parse_literal('{"a": 1,}'), {"a": 1})

    def test_string_escapes_are_decoded(self) -> None:
        self.assertEqual(jsdata.decode_string_literal(r"'it\'s'"), "it's")
        self.assertEqual(jsdata.decode_string_literal(r'"a\\b\n\x41é"'), "a\\b\nAé")

    def test_unterminated_array_fails_to_load(self) -> None:
        with self.assertRaises(IndexLoadError):
            jsdata.parse_literal("[1, 2,")

    def test_missing_separator_fails_to_load(self) -> None:
        with self.assertRaises(IndexLoadError):
            jsdata.parse_literal("['a' 'b']")

    def test_code_is_rejected_instead_of_evaluated(self) -> None:
        with self.assertRaises(IndexLoadError):
            jsdata.parse_assignments("var searchData = loadData();")
        with self.assertRaises(IndexLoadError):
            jsdata.parse_assignments("searchData.push(1);")

    def test_trailing_data_after_literal_is_rejected(self) -> None:
        with self.assertRaises(IndexLoadError):
            jsdata.parse_literal("[1] [2]")

    def test_deep_nesting_fails_to_load(self) -> None:
        with self.assertRaises(IndexLoadError):
            jsdata.parse_assignments("var searchData=" + "[" * 5000 + "]" * 5000 + ";")
        self.assertEqual(jsdata.parse_literal("[" * 10 + "]" * 10), [[[[[[[[[[]]]]]]]]]])

    def test_escaped_surrogate_pairs_combine(self) -> None:
        self.assertEqual(jsdata.decode_string_literal(r"'\ud83d\ude00'"), "\U0001F600")
        with self.assertRaises(IndexLoadError):
            jsdata.decode_string_literal(r"'\ud83d'")


class JsDataFormatTests(unittest.TestCase):
    def test_format_literal_is_compact_and_quotes_strings(self) -> None:
        self.assertEqual(
            jsdata.format_literal(["it's", [1, True, None]]),
            "['it\\'s',[1,true,null]]",
        )

    def test_format_array_assignment_puts_one_row_per_line(self) -> None:
        rendered = jsdata.format_array_assignment("searchData", [["a", 1], ["b", 2]])
        self.assertEqual(rendered, "var searchData=\n[\n  ['a',1],\n  ['b',2]\n];\n")
        self.assertEqual(jsdata.parse_assignments(rendered), {"searchData": [["a", 1], ["b", 2]]})

    def test_format_array_assignment_with_no_rows(self) -> None:
        rendered = jsdata.format_array_assignment("searchData", [])
        self.assertEqual(jsdata.parse_assignments(rendered), {"searchData": []})

    def test_format_object_assignment_uses_double_quotes(self) -> None:
        rendered = jsdata.format_object_assignment("indexSectionNames", {0: "all", 1: "functions"})
        self.assertEqual(rendered, 'var indexSectionNames =\n{\n  0: "all",\n  1: "functions"\n};\n')


if __name__ == "__main__":
    unittest.main()
