# encoding: utf-8

"""Test rendering of mock classes and headers."""

import os
import textwrap
import unittest

from mocksmith import render
from mocksmith.model import MockSpec, RenderedMock

from .helpers import class_decl, method


def spec(cls, methods=None, mock_name=None):
    return MockSpec(cls, mock_name or "Mock" + cls.name, tuple(cls.methods if methods is None else methods))


class MockMethodTest(unittest.TestCase):
    """Given single methods."""

    def verify(self, m, expected):
        self.assertEqual(expected, render.generate_mock_method(m))

    def test_simple_method(self):
        self.verify(method("bar"), "MOCK_METHOD(void, bar, (), (override));")

    def test_non_virtual_method_has_no_override(self):
        self.verify(method("bar", is_virtual=False), "MOCK_METHOD(void, bar, (), ());")

    def test_pure_virtual_method(self):
        self.verify(
            method("bar", is_virtual=True, is_pure_virtual=True),
            "MOCK_METHOD(void, bar, (), (override));",
        )

    def test_named_and_unnamed_parameters(self):
        self.verify(
            method("bar", "int", [("a", "int"), ("", "const char *")]),
            "MOCK_METHOD(int, bar, (int a, const char *), (override));",
        )

    def test_reference_and_pointer_types_are_kept(self):
        self.verify(
            method("get", "const Bar &", [("b", "Bar *const"), ("r", "Bar &&")]),
            "MOCK_METHOD(const Bar &, get, (Bar *const b, Bar && r), (override));",
        )

    def test_qualifiers(self):
        self.verify(
            method("bar", is_const=True, is_noexcept=True, ref_qualifier="&"),
            "MOCK_METHOD(void, bar, (), (const, noexcept, ref(&), override));",
        )

    def test_rvalue_ref_qualifier(self):
        self.verify(
            method("bar", is_const=True, ref_qualifier="&&"),
            "MOCK_METHOD(void, bar, (), (const, ref(&&), override));",
        )

    def test_types_with_commas_are_parenthesized(self):
        self.verify(
            method("bar", "std::map<int, int>", [("arg", "const std::map<int, int> &")]),
            "MOCK_METHOD((std::map<int, int>), bar, ((const std::map<int, int> & arg)), "
            "(override));",
        )


class OperatorTest(unittest.TestCase):
    """Operators cannot be named in MOCK_METHOD."""

    def test_operator_forwards_to_named_mock(self):
        lines = render.mock_method_lines(
            method("operator==", "bool", [("other", "const Foo &")], is_const=True)
        )
        self.assertEqual(
            [
                "bool operator==(const Foo & other) const override "
                "{ return equality_operator(other); }",
                "MOCK_METHOD(bool, equality_operator, (const Foo & other), (const));",
            ],
            lines,
        )

    def test_unnamed_parameters_get_names(self):
        lines = render.mock_method_lines(method("operator()", "void", [("", "int")]))
        self.assertEqual(
            "void operator()(int arg0) override { function_call_operator(arg0); }",
            lines[0],
        )

    def test_conversion_function(self):
        lines = render.mock_method_lines(
            method("operator bool", "bool", is_const=True, is_pure_virtual=True)
        )
        self.assertEqual(
            [
                "operator bool() const override { return conversion_operator_bool(); }",
                "MOCK_METHOD(bool, conversion_operator_bool, (), (const));",
            ],
            lines,
        )

    def test_conversion_mock_name_is_an_identifier(self):
        conversion = method("operator const char *", "const char *", is_const=True)
        self.assertEqual(
            "conversion_operator_const_char", render.operator_mock_name(conversion)
        )
        self.assertIsNone(render.operator_mock_name(method("bar")))

    def test_rvalue_parameters_are_forwarded(self):
        lines = render.mock_method_lines(
            method("operator=", "Foo &", [("other", "Foo &&")], is_virtual=False)
        )
        self.assertEqual(
            "Foo & operator=(Foo && other) "
            "{ return assignment_operator(std::forward<Foo &&>(other)); }",
            lines[0],
        )


class RenderMockTest(unittest.TestCase):
    """Given whole classes."""

    def test_simple_class(self):
        cls = class_decl("Foo", [method("bar", is_pure_virtual=True)])
        self.assertEqual(
            RenderedMock(
                "MockFoo",
                textwrap.dedent(
                    """\
                    class MockFoo : public Foo
                    {
                    public:
                      MOCK_METHOD(void, bar, (), (override));
                    };
                    """
                ),
            ),
            render.render_mock(spec(cls)),
        )

    def test_empty_class(self):
        cls = class_decl("Foo")
        self.assertEqual(
            "class MockFoo : public Foo\n{\npublic:\n};\n",
            render.render_mock(spec(cls)).text,
        )

    def test_configured_indent(self):
        cls = class_decl("Foo", [method("bar")])
        text = render.render_mock(spec(cls), indent="    ").text
        self.assertIn("\n    MOCK_METHOD(void, bar, (), (override));\n", text)

    def test_simplified_namespaces(self):
        cls = class_decl("Foo", [method("bar")], namespaces=["outer", "inner"])
        self.assertEqual(
            textwrap.dedent(
                """\
                namespace outer::inner {
                class MockFoo : public outer::inner::Foo
                {
                public:
                  MOCK_METHOD(void, bar, (), (override));
                };
                }
                """
            ),
            render.render_mock(spec(cls)).text,
        )

    def test_nested_namespaces(self):
        cls = class_decl("Foo", [method("bar")], namespaces=["outer", "inner"])
        text = render.render_mock(spec(cls), simplified_namespaces=False).text
        self.assertTrue(text.startswith("namespace outer { namespace inner {\n"))
        self.assertTrue(text.endswith("};\n}}\n"))

    def test_anonymous_namespace_is_never_simplified(self):
        cls = class_decl("Foo", namespaces=["outer", ""], qualified_name="outer::Foo")
        text = render.render_mock(spec(cls)).text
        self.assertTrue(text.startswith("namespace outer { namespace {\n"))
        self.assertIn("class MockFoo : public outer::Foo\n", text)

    def test_nested_class_inherits_qualified_name(self):
        cls = class_decl("Inner", qualified_name="ns::Outer::Inner", namespaces=["ns"])
        text = render.render_mock(spec(cls)).text
        self.assertIn("class MockInner : public ns::Outer::Inner\n", text)

    def test_overloads_are_numbered_by_declaration(self):
        cls = class_decl(
            "Foo",
            [
                method("bar", params=[("a", "int")], overload_index=0),
                method("baz"),
                method("bar", params=[("a", "int"), ("b", "int")], overload_index=1),
            ],
        )
        lines = render.render_mock(spec(cls)).text.splitlines()
        self.assertIn("  MOCK_METHOD(void, bar, (int a), (override));  // overload 0", lines)
        self.assertIn("  MOCK_METHOD(void, baz, (), (override));", lines)
        self.assertIn(
            "  MOCK_METHOD(void, bar, (int a, int b), (override));  // overload 1", lines
        )

    def test_overload_number_survives_filtering(self):
        methods = [
            method("bar", is_virtual=False, overload_index=0),
            method("bar", params=[("a", "int")], overload_index=1),
            method("bar", params=[("a", "double")], overload_index=2),
        ]
        cls = class_decl("Foo", methods)
        text = render.render_mock(spec(cls, methods[1:])).text
        self.assertIn("(int a), (override));  // overload 1\n", text)
        self.assertIn("(double a), (override));  // overload 2\n", text)

    def test_single_selected_overload_is_not_numbered(self):
        methods = [
            method("bar", is_virtual=False, overload_index=0),
            method("bar", params=[("a", "int")], overload_index=1),
        ]
        text = render.render_mock(spec(class_decl("Foo", methods), methods[1:])).text
        self.assertNotIn("overload", text)


class CodeBuilderTest(unittest.TestCase):
    """Test CodeBuilder class."""

    def setUp(self):
        self.builder = render.CodeBuilder("  ")

    def test_indentation(self):
        self.builder.add_line("{")
        self.builder.push_indent()
        self.builder.add_line("x;")
        self.builder.pop_indent()
        self.builder.add_line("}")
        self.assertEqual("{\n  x;\n}\n", self.builder.build())

    def test_negative_indentation(self):
        with self.assertRaises(ValueError):
            self.builder.pop_indent()

    def test_unmatched_indentation(self):
        self.builder.push_indent()
        with self.assertRaises(ValueError):
            self.builder.build()


class RenderHeaderTest(unittest.TestCase):
    """Given complete headers."""

    def setUp(self):
        self.mocks = [
            RenderedMock("MockFoo", "class MockFoo : public Foo\n{\npublic:\n};\n"),
            RenderedMock("MockBar", "class MockBar : public Bar\n{\npublic:\n};\n"),
        ]

    def test_header_layout(self):
        text = render.render_header(["/src/foo.h"], self.mocks, ["foo.h"])
        self.assertEqual(
            "// Automatically generated by mocksmith from foo.h\n"
            "#pragma once\n"
            "\n"
            '#include "foo.h"\n'
            "#include <gmock/gmock.h>\n"
            "\n"
            "class MockFoo : public Foo\n{\npublic:\n};\n"
            "\n"
            "class MockBar : public Bar\n{\npublic:\n};\n",
            text,
        )

    def test_several_sources(self):
        text = render.render_header(
            ["/src/a.h", "/src/b.h"], self.mocks[:1], ["a.h", "sub/b.h"]
        )
        self.assertTrue(
            text.startswith("// Automatically generated by mocksmith from a.h, b.h\n")
        )
        self.assertIn('#include "a.h"\n#include "sub/b.h"\n#include <gmock/gmock.h>\n', text)

    def test_no_mocks(self):
        text = render.render_header(["/src/foo.h"], [], ["foo.h"])
        self.assertTrue(text.endswith("#include <gmock/gmock.h>\n"))

    def test_msvc_allow_deprecated(self):
        text = render.render_header(
            ["/src/foo.h"], self.mocks[:1], ["foo.h"], msvc_allow_deprecated=True
        )
        self.assertIn(
            "#ifdef _MSC_VER\n"
            "#  pragma warning(push)\n"
            "#  pragma warning(disable : 4996)\n"
            "#endif\n"
            "\n"
            "class MockFoo : public Foo\n{\npublic:\n};\n"
            "#ifdef _MSC_VER\n"
            "#  pragma warning(pop)\n"
            "#endif\n",
            text,
        )


class IncludePathTest(unittest.TestCase):
    """Paths used to include the mocked headers."""

    def setUp(self):
        self.root = os.path.join(os.path.abspath(os.sep), "mocksmith-nowhere")

    def root_path(self, *parts):
        return os.path.join(self.root, *parts)

    def test_relative_to_output_directory(self):
        self.assertEqual(
            "../include/foo.h",
            render.header_include_path(
                self.root_path("p", "include", "foo.h"), relative_to=self.root_path("p", "mocks")
            ),
        )

    def test_shortest_path_from_include_dirs(self):
        include_dirs = [self.root_path("usr", "include"), self.root_path("usr", "local", "include")]
        self.assertEqual(
            "another/header.h",
            render.header_include_path(
                self.root_path("usr", "local", "include", "another", "header.h"), include_dirs
            ),
        )

    def test_outside_include_dirs(self):
        include_dirs = [self.root_path("usr", "include"), self.root_path("usr", "local", "include")]
        self.assertEqual(
            "../header.h",
            render.header_include_path(self.root_path("usr", "local", "header.h"), include_dirs),
        )


if __name__ == "__main__":
    unittest.main()
