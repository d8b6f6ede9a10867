# encoding: utf-8

"""Builders and fixtures shared by the test modules."""

import os
import shutil
import tempfile
import textwrap
import unittest

from clang import cindex

from mocksmith import clangparse
from mocksmith.model import ClassDecl, MethodDecl, ParamDecl, SourceHeader


def method(name, return_type="void", params=(), **kwargs):
    """MethodDecl of a virtual method unless told otherwise."""
    kwargs.setdefault("is_const", False)
    kwargs.setdefault("is_virtual", True)
    kwargs.setdefault("is_pure_virtual", False)
    kwargs.setdefault("is_static", False)
    return MethodDecl(
        name=name,
        return_type=return_type,
        params=tuple(ParamDecl(*param) for param in params),
        **kwargs,
    )


def class_decl(name, methods=(), namespaces=(), qualified_name=None):
    return ClassDecl(
        name=name,
        qualified_name=qualified_name or "::".join(tuple(namespaces) + (name,)),
        namespaces=tuple(namespaces),
        methods=tuple(methods),
        is_abstract=any(m.is_pure_virtual for m in methods),
    )


def some_class(name):
    """C++ class to mock, when the content does not matter."""
    return textwrap.dedent(
        f"""\
        class {name} {{
        public:
          virtual void fun() = 0;
        }};
        """
    )


def some_mock(class_name, mock_name):
    """Mock of a class made by some_class()."""
    return textwrap.dedent(
        f"""\
        class {mock_name} : public {class_name}
        {{
        public:
          MOCK_METHOD(void, fun, (), (override));
        }};
        """
    )


class FakeParser:
    """Stands in for ClangParser, serving prepared headers by base name."""

    def __init__(self, classes_by_name=None):
        self.classes_by_name = classes_by_name or {}
        self.parsed = []

    def parse_file(self, path, args=()):
        path = os.path.abspath(path)
        clangparse.read_source(path)
        self.parsed.append(path)
        classes = self.classes_by_name.get(os.path.basename(path), ())
        return SourceHeader(path, tuple(classes), ())

    def parse_string(self, content, args=()):
        return SourceHeader(None, tuple(self.classes_by_name.get(None, ())), ())


def libclang_available():
    try:
        cindex.Index.create()
    except cindex.LibclangError:
        return False
    return True


requires_libclang = unittest.skipUnless(libclang_available(), "libclang not available")


class TempDirTestCase(unittest.TestCase):
    """Test case working in a fresh temporary directory."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp(prefix="mocksmith-")
        self.addCleanup(shutil.rmtree, self.tmp, ignore_errors=True)

    def path(self, *parts):
        return os.path.join(self.tmp, *parts)

    def write(self, name, content):
        path = self.path(name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as output:
            output.write(content)
        return path

    def read(self, name):
        with open(self.path(name), encoding="utf-8") as input_file:
            return input_file.read()
