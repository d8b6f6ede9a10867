#!/usr/bin/env python
# encoding: utf-8

"""Rendering of gMock classes and of complete mock headers."""

import logging
import os
import re

from .model import RenderedMock

log = logging.getLogger(__name__)

GENERATOR = "mocksmith"
GMOCK_INCLUDE = "#include <gmock/gmock.h>"
DEFAULT_INDENT = "  "

MSVC_ALLOW_DEPRECATED_BEGIN = (
    "#ifdef _MSC_VER\n"
    "#  pragma warning(push)\n"
    "#  pragma warning(disable : 4996)\n"
    "#endif\n"
    "\n"
)
MSVC_ALLOW_DEPRECATED_END = "#ifdef _MSC_VER\n#  pragma warning(pop)\n#endif\n"

# MOCK_METHOD cannot take an operator as name, operators forward to these.
OPERATORS = {
    "operator,": "comma_operator",
    "operator!": "logical_not_operator",
    "operator!=": "inequality_operator",
    "operator%": "modulus_operator",
    "operator%=": "modulus_assignment_operator",
    "operator&": "address_of_or_bitwise_and_operator",
    "operator&&": "logical_and_operator",
    "operator&=": "bitwise_and_assignment_operator",
    "operator()": "function_call_operator",
    "operator*": "multiplication_or_dereference_operator",
    "operator*=": "multiplication_assignment_operator",
    "operator+": "addition_or_unary_plus_operator",
    "operator++": "increment_operator",
    "operator+=": "addition_assignment_operator",
    "operator-": "subtraction_or_unary_negation_operator",
    "operator--": "decrement_operator",
    "operator-=": "subtraction_assignment_operator",
    "operator->": "member_selection_operator",
    "operator->*": "pointer_to_member_selection_operator",
    "operator/": "division_operator",
    "operator/=": "division_assignment_operator",
    "operator<": "less_than_operator",
    "operator<<": "left_shift_operator",
    "operator<<=": "left_shift_assignment_operator",
    "operator<=": "less_than_or_equal_to_operator",
    "operator<=>": "three_way_comparison_operator",
    "operator=": "assignment_operator",
    "operator==": "equality_operator",
    "operator>": "greater_than_operator",
    "operator>=": "greater_than_or_equal_to_operator",
    "operator>>": "right_shift_operator",
    "operator>>=": "right_shift_assignment_operator",
    "operator[]": "array_subscript_operator",
    "operator^": "exclusive_or_operator",
    "operator^=": "exclusive_or_assignment_operator",
    "operator|": "bitwise_inclusive_or_operator",
    "operator|=": "bitwise_inclusive_or_assignment_operator",
    "operator||": "logical_or_operator",
    "operator~": "complement_operator",
}
CONVERSION_PREFIX = "operator "
identifier_re = re.compile(r"\W+")


class CodeBuilder:
    """Collects lines of code at the current indentation level."""

    def __init__(self, indent=DEFAULT_INDENT):
        self.indent = indent
        self.level = 0
        self.lines = []

    def push_indent(self):
        self.level += 1

    def pop_indent(self):
        """Decrease indentation, which must not go below zero."""
        if self.level == 0:
            raise ValueError("Indent level cannot be negative")
        self.level -= 1

    def add_line(self, line):
        self.lines.append(self.indent * self.level + line)

    def build(self):
        if self.level != 0:
            raise ValueError("Unmatched indent level")
        return "".join(line + "\n" for line in self.lines)


def wrap_if_comma(text):
    """Parenthesize types with commas, macro arguments would split otherwise."""
    if "," in text:
        return f"({text})"
    return text


def parameter(param):
    if param.name:
        return f"{param.type} {param.name}"
    return param.type


def qualifiers(method, override=True):
    """MOCK_METHOD qualifier list of ``method``."""
    quals = []
    if method.is_const:
        quals.append("const")
    if method.is_noexcept:
        quals.append("noexcept")
    if method.ref_qualifier:
        quals.append(f"ref({method.ref_qualifier})")
    if override and (method.is_virtual or method.is_pure_virtual):
        quals.append("override")
    return quals


def generate_mock_method(method, name=None, override=True):
    """Generate MOCK_METHOD google macro."""
    params = ", ".join(wrap_if_comma(parameter(param)) for param in method.params)
    return (
        f"MOCK_METHOD({wrap_if_comma(method.return_type)}, {name or method.name}, "
        f"({params}), ({', '.join(qualifiers(method, override))}));"
    )


def is_conversion(method):
    """Whether ``method`` is a conversion function such as ``operator bool``."""
    return method.name.startswith(CONVERSION_PREFIX) and method.name not in OPERATORS


def operator_mock_name(method):
    """Name of the mock an operator forwards to, None for other methods."""
    if method.name in OPERATORS:
        return OPERATORS[method.name]
    if is_conversion(method):
        return "conversion_operator_" + identifier_re.sub("_", method.return_type).strip("_")
    return None


def generate_operator_forward(method, mock_name):
    """Override of an operator that delegates to the mocked ``mock_name``."""
    names = [param.name or f"arg{index}" for index, param in enumerate(method.params)]
    params = ", ".join(
        f"{param.type} {name}" for param, name in zip(method.params, names)
    )
    args = ", ".join(
        f"std::forward<{param.type}>({name})" if param.type.endswith("&&") else name
        for param, name in zip(method.params, names)
    )
    trailer = "".join(
        f" {qual}"
        for qual, present in (
            ("const", method.is_const),
            ("noexcept", method.is_noexcept),
            (method.ref_qualifier, method.ref_qualifier),
            ("override", method.is_virtual or method.is_pure_virtual),
        )
        if present
    )
    call = f"{mock_name}({args});"
    body = call if method.return_type.strip() == "void" else f"return {call}"
    declared = method.name if is_conversion(method) else f"{method.return_type} {method.name}"
    return f"{declared}({params}){trailer} {{ {body} }}"


def mock_method_lines(method, overloaded=False):
    """Lines declaring the mock of one method."""
    suffix = f"  // overload {method.overload_index}" if overloaded else ""
    mock_name = operator_mock_name(method)
    if mock_name:
        return [
            generate_operator_forward(method, mock_name),
            generate_mock_method(method, name=mock_name, override=False) + suffix,
        ]
    return [generate_mock_method(method) + suffix]


def namespace_begin(namespaces, simplified=True):
    if not namespaces:
        return None
    if simplified and all(namespaces):
        return f"namespace {'::'.join(namespaces)} {{"
    return " ".join(f"namespace {ns} {{" if ns else "namespace {" for ns in namespaces)


def namespace_end(namespaces, simplified=True):
    if not namespaces:
        return None
    if simplified and all(namespaces):
        return "}"
    return "}" * len(namespaces)


def render_mock(spec, indent=DEFAULT_INDENT, simplified_namespaces=True):
    """Render the mock class of a MockSpec.

    Args:
        spec: MockSpec to render.
        indent: indentation of the method declarations.
        simplified_namespaces: use ``namespace a::b {`` (C++17) rather than
            nesting ``namespace a { namespace b {``.

    Returns:
        RenderedMock.

    """
    builder = CodeBuilder(indent)
    namespaces = spec.source.namespaces
    begin = namespace_begin(namespaces, simplified_namespaces)
    if begin:
        builder.add_line(begin)
    builder.add_line(f"class {spec.mock_name} : public {spec.source.qualified_name}")
    builder.add_line("{")
    builder.add_line("public:")
    builder.push_indent()
    name_counts = {}
    for method in spec.methods:
        name_counts[method.name] = name_counts.get(method.name, 0) + 1
    for method in spec.methods:
        for line in mock_method_lines(method, overloaded=name_counts[method.name] > 1):
            builder.add_line(line)
    builder.pop_indent()
    builder.add_line("};")
    end = namespace_end(namespaces, simplified_namespaces)
    if end:
        builder.add_line(end)
    return RenderedMock(spec.mock_name, builder.build())


def join_mocks(mocks):
    return "\n".join(mock.text for mock in mocks)


def header_include_path(source_path, include_dirs=(), relative_to=None):
    """Path to use in ``#include "..."`` for ``source_path``.

    The shortest path relative to one of the include directories wins. With
    no include directory, the path is relative to ``relative_to`` (the
    directory of the output file), or to the current directory.

    """
    source_path = os.path.realpath(source_path)
    candidates = []
    for include_dir in include_dirs or [relative_to or os.curdir]:
        try:
            candidates.append(os.path.relpath(source_path, os.path.realpath(include_dir)))
        except ValueError:
            # No relative path between different drives on Windows.
            log.debug("%s is not reachable from %s", source_path, include_dir)
    if not candidates:
        return source_path.replace(os.sep, "/")
    best = min(candidates, key=lambda path: len(path.split(os.sep)))
    return best.replace(os.sep, "/")


def render_header(sources, mocks, includes, msvc_allow_deprecated=False):
    """Assemble a complete mock header.

    Args:
        sources: paths of the originating headers, named in the banner.
        mocks: RenderedMock sequence in output order.
        includes: include paths of the originating headers.
        msvc_allow_deprecated: silence MSVC warnings on overriding deprecated
            methods.

    """
    names = ", ".join(os.path.basename(source) for source in sources)
    lines = [f"// Automatically generated by {GENERATOR} from {names}", "#pragma once", ""]
    lines.extend(f'#include "{include}"' for include in includes)
    lines.append(GMOCK_INCLUDE)
    header = "".join(line + "\n" for line in lines)
    if not mocks:
        return header
    body = join_mocks(mocks)
    if msvc_allow_deprecated:
        body = MSVC_ALLOW_DEPRECATED_BEGIN + body + MSVC_ALLOW_DEPRECATED_END
    return header + "\n" + body
