from __future__ import annotations

import re
import unittest

from doxindex import naming


class NamingTests(unittest.TestCase):
    def test_search_id_keeps_lowercase_alnum_and_hex_encodes_the_rest(self) -> None:
        self.assertEqual(naming.search_id("floor_divide"), "floor_5fdivide")
        self.assertEqual(naming.search_id("fromDCM"), "fromdcm")
        self.assertEqual(naming.search_id("operator+="), "operator_2b_3d")
        self.assertEqual(naming.search_id("~Pixel"), "_7epixel")

    def test_escape_page_name_follows_doxygen_file_naming(self) -> None:
        self.assertEqual(naming.escape_page_name("NumCpp::Rotations::Quaternion"), "_num_cpp_1_1_rotations_1_1_quaternion")
        self.assertEqual(naming.escape_page_name("data_cube"), "data__cube")
        self.assertEqual(naming.escape_page_name("Shape<int>"), "_shape_3int_4")

    def test_compound_and_file_pages(self) -> None:
        self.assertEqual(
            naming.compound_page("class", "NumCpp::NdArray", "../"),
            "../class_num_cpp_1_1_nd_array.html",
        )
        self.assertEqual(naming.compound_page("namespace", "NumCpp"), "namespace_num_cpp.html")
        self.assertEqual(naming.file_page("ImageProcessing.hpp", "../"), "../_image_processing_8hpp.html")

    def test_member_anchor_is_stable_and_signature_sensitive(self) -> None:
        first = naming.member_anchor("function", "NumCpp::Methods::fix", "(dtype inValue)")
        again = naming.member_anchor("function", "NumCpp::Methods::fix", "(dtype inValue)")
        overload = naming.member_anchor("function", "NumCpp::Methods::fix", "(const NdArray<dtype>& inArray)")
        self.assertEqual(first, again)
        self.assertNotEqual(first, overload)
        self.assertRegex(first, re.compile(r"^a[0-9a-f]{32}$"))

    def test_default_values_do_not_change_the_anchor(self) -> None:
        self.assertEqual(
            naming.member_anchor("function", "NumCpp::Methods::fix", "(dtype inValue = 0)"),
            naming.member_anchor("function", "NumCpp::Methods::fix", "(dtype inValue)"),
        )
        self.assertEqual(
            naming.strip_default_arguments("(const Shape& s = Shape(1, 2), Axis axis = Axis::NONE)"),
            "(const Shape& s, Axis axis)",
        )
        self.assertEqual(naming.strip_default_arguments("(std::vector<int> v)"), "(std::vector<int> v)")

    def test_strip_template_arguments_handles_nesting(self) -> None:
        self.assertEqual(naming.strip_template_arguments("NdArray<std::vector<int>>"), "NdArray")
        self.assertEqual(naming.strip_template_arguments("Methods"), "Methods")

    def test_split_and_join_url(self) -> None:
        self.assertEqual(naming.split_url("../a.html#a1b2"), ("../a.html", "a1b2"))
        self.assertEqual(naming.split_url("../a.html"), ("../a.html", ""))
        self.assertEqual(naming.join_url("../a.html", ""), "../a.html")
        self.assertEqual(naming.join_url("../a.html", "a1b2"), "../a.html#a1b2")


if __name__ == "__main__":
    unittest.main()
