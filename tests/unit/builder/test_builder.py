"""Declaration grouping, labels and page references for generated tables."""

from __future__ import annotations

import unittest
from pathlib import Path

from doxindex import builder
from doxindex.declarations_types import SymbolDeclaration
from doxindex.naming import member_anchor

HEADER = Path("include/NumCpp/Methods.hpp")


def decl(kind: str, name: str, scope: tuple[str, ...] = (), scope_kind: str | None = None, arguments=None):
    return SymbolDeclaration(
        kind=kind,
        name=name,
        scope=scope,
        scope_kind=scope_kind,
        arguments=arguments,
        path=HEADER,
        line=1,
    )


METHODS = ("NumCpp", "Methods")
DECLARATIONS = [
    decl("namespace", "NumCpp"),
    decl("class", "Methods", ("NumCpp",), "namespace"),
    decl("function", "floor", METHODS, "class", "(dtype inValue)"),
    decl("function", "floor", METHODS, "class", "(const NdArray<dtype>& inArray)"),
    decl("function", "floor_divide", METHODS, "class", "(dtype inValue1, dtype inValue2)"),
    decl("function", "fromDCM", ("NumCpp", "Rotations", "Quaternion"), "class", "(const NdArray<double>& inDcm)"),
    decl("struct", "Shape", ("NumCpp",), "namespace"),
    decl("function", "fix", METHODS, "class", "(dtype inValue)"),
    # Out-of-line definition repeating the prototype above.
    decl("function", "fix", METHODS, "class", "(dtype inValue)"),
    decl("function", "main", (), None, "()"),
]


class BuildTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = builder.build_table(
            [declaration for declaration in DECLARATIONS if declaration.kind == "function"]
        )

    def test_entries_are_keyed_by_search_id_and_sorted(self) -> None:
        self.assertEqual(self.table.keys(), ["fix", "floor", "floor_5fdivide", "fromdcm", "main"])
        self.assertEqual(self.table.get("fromdcm").display_name, "fromDCM")

    def test_overloads_collapse_into_one_entry_with_signature_labels(self) -> None:
        floor = self.table.get("floor")
        self.assertEqual(
            [target.qualified_label for target in floor.targets],
            [
                "NumCpp::Methods::floor(dtype inValue)",
                "NumCpp::Methods::floor(const NdArray<dtype>& inArray)",
            ],
        )
        self.assertEqual({target.document_path for target in floor.targets}, {"../class_num_cpp_1_1_methods.html"})
        self.assertNotEqual(floor.targets[0].anchor_id, floor.targets[1].anchor_id)

    def test_single_target_is_labelled_with_its_scope(self) -> None:
        fromdcm = self.table.get("fromdcm").targets[0]
        self.assertEqual(fromdcm.qualified_label, "NumCpp::Rotations::Quaternion")
        self.assertEqual(fromdcm.document_path, "../class_num_cpp_1_1_rotations_1_1_quaternion.html")
        self.assertEqual(
            fromdcm.anchor_id,
            member_anchor("function", "NumCpp::Rotations::Quaternion::fromDCM", "(const NdArray<double>& inDcm)"),
        )

    def test_repeated_declaration_yields_one_target(self) -> None:
        fix = self.table.get("fix")
        self.assertEqual(len(fix.targets), 1)
        self.assertEqual(fix.targets[0].qualified_label, "NumCpp::Methods")

    def test_prototype_with_default_and_definition_yield_one_target(self) -> None:
        table = builder.build_table(
            [
                decl("function", "clip", METHODS, "class", "(dtype inValue, dtype inMin = 0)"),
                decl("function", "clip", METHODS, "class", "(dtype inValue, dtype inMin)"),
            ]
        )
        targets = table.get("clip").targets
        self.assertEqual(len(targets), 1)
        self.assertEqual(targets[0].qualified_label, "NumCpp::Methods")

    def test_file_level_function_points_at_file_page(self) -> None:
        main = self.table.get("main").targets[0]
        self.assertEqual(main.document_path, "../_methods_8hpp.html")
        self.assertEqual(main.qualified_label, "main")

    def test_page_prefix_is_configurable(self) -> None:
        table = builder.build_table(DECLARATIONS[2:3], page_prefix="")
        self.assertEqual(table.get("floor").targets[0].document_path, "class_num_cpp_1_1_methods.html")


class BuildSectionsTests(unittest.TestCase):
    def test_sections_partition_declarations_by_kind(self) -> None:
        sections = builder.build_sections(DECLARATIONS)
        self.assertEqual(list(sections), ["all", "namespaces", "classes", "functions"])
        self.assertEqual(sections["namespaces"].keys(), ["numcpp"])
        self.assertEqual(sections["classes"].keys(), ["methods", "shape"])
        self.assertEqual(len(sections["functions"]), 5)
        self.assertEqual(len(sections["all"]), 8)

    def test_compounds_link_to_their_own_page_without_anchor(self) -> None:
        classes = builder.build_sections(DECLARATIONS, sections=["classes"])["classes"]
        shape = classes.get("shape").targets[0]
        self.assertEqual(shape.document_path, "../struct_num_cpp_1_1_shape.html")
        self.assertEqual(shape.anchor_id, "")
        self.assertEqual(shape.url, "../struct_num_cpp_1_1_shape.html")
        self.assertEqual(shape.qualified_label, "NumCpp")

    def test_unknown_section_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            builder.build_sections(DECLARATIONS, sections=["macros"])


if __name__ == "__main__":
    unittest.main()
