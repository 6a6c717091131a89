"""Grammar configuration for declaration scanning."""

from __future__ import annotations

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".c": "c",
    ".h": "cpp",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
}

# Nodes whose named children are scanned in the current scope.
CONTAINER_NODE_TYPES = {
    "translation_unit",
    "declaration_list",
    "template_declaration",
    "linkage_specification",
    "preproc_if",
    "preproc_ifdef",
    "preproc_else",
    "preproc_elif",
}
NAMESPACE_NODE_TYPES = {"namespace_definition"}
CLASS_KIND_BY_NODE_TYPE: dict[str, str] = {
    "class_specifier": "class",
    "struct_specifier": "struct",
}
FUNCTION_DEFINITION_NODE_TYPES = {"function_definition"}
DECLARATION_NODE_TYPES = {"declaration", "field_declaration"}
# Declarator wrappers between a declaration and its function_declarator.
WRAPPER_DECLARATOR_TYPES = {
    "pointer_declarator",
    "reference_declarator",
    "attributed_declarator",
}
FUNCTION_NAME_NODE_TYPES = {
    "identifier",
    "field_identifier",
    "qualified_identifier",
    "operator_name",
    "destructor_name",
    "template_function",
    "operator_cast",
}
QUALIFIED_NAME_NODE_TYPES = {"qualified_identifier", "template_function"}

DEFAULT_ACCESS_BY_KIND: dict[str, str] = {
    "class": "private",
    "struct": "public",
}

COMPOUND_KINDS = ("namespace", "class", "struct")

# Kind assumed for an out-of-line qualifier that names no recorded compound.
UNKNOWN_QUALIFIER_KIND = "class"

MISSING_PARSER_ERROR = (
    "Tree-sitter parser package not found. Install tree-sitter-languages or tree-sitter-language-pack."
)
