#!/usr/bin/env python
# encoding: utf-8

"""Flat, immutable model of parsed C++ classes and the mocks made from them."""

import collections

Diagnostic = collections.namedtuple(
    "Diagnostic", "file line column message severity"
)
SourceHeader = collections.namedtuple("SourceHeader", "path classes diagnostics")
ClassDecl = collections.namedtuple(
    "ClassDecl", "name qualified_name namespaces methods is_abstract"
)
ParamDecl = collections.namedtuple("ParamDecl", "name type")
MethodDecl = collections.namedtuple(
    "MethodDecl",
    "name return_type params is_const is_virtual is_pure_virtual is_static "
    "overload_index kind is_noexcept ref_qualifier access is_final",
    defaults=(0, "method", False, "", "public", False),
)
MockSpec = collections.namedtuple("MockSpec", "source mock_name methods")
RenderedMock = collections.namedtuple("RenderedMock", "mock_name text")
OutputArtifact = collections.namedtuple("OutputArtifact", "path text sources")

METHOD = "method"
CONSTRUCTOR = "constructor"
DESTRUCTOR = "destructor"


def overload_indices(names):
    """Ordinal of each name among the previous occurrences of the same name.

    >>> overload_indices(["bar", "foo", "bar"])
    [0, 0, 1]

    """
    seen = collections.Counter()
    indices = []
    for name in names:
        indices.append(seen[name])
        seen[name] += 1
    return indices
