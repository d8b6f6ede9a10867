#!/usr/bin/env python
# encoding: utf-8

"""Extraction of the classes of a header with libclang.

libclang's tree is only walked once: everything the generator needs is
copied into the flat model of :mod:`mocksmith.model` and the translation
unit is dropped afterwards.

"""

import collections
import logging
import os
import re
import threading

from clang.cindex import (
    Config,
    CursorKind,
    Diagnostic as ClangDiagnostic,
    ExceptionSpecificationKind,
    Index,
    LibclangError,
    RefQualifierKind,
    TranslationUnit,
    TranslationUnitLoadError,
)

from .errors import ConfigError, FileSystemError, InputNotFound, ParseError
from .model import (
    CONSTRUCTOR,
    DESTRUCTOR,
    METHOD,
    ClassDecl,
    Diagnostic,
    MethodDecl,
    ParamDecl,
    SourceHeader,
    overload_indices,
)

log = logging.getLogger(__name__)

# Name given to in-memory input, never reported to the user.
DUMMY_FILE = "mocksmith_dummy_input_file.h"

DEFAULT_STANDARD = "c++17"
STANDARDS = tuple(
    f"{prefix}++{version}"
    for prefix in ("c", "gnu")
    for version in ("98", "03", "11", "14", "17", "20", "23", "2c")
)
# Standards accepting `namespace a::b {`.
NESTED_NAMESPACE_STANDARDS = frozenset(
    standard for standard in STANDARDS if standard[-2:] in ("17", "20", "23", "2c")
)

SEVERITIES = {
    ClangDiagnostic.Warning: "warning",
    ClangDiagnostic.Error: "error",
    ClangDiagnostic.Fatal: "fatal",
}
CLASS_KINDS = (CursorKind.CLASS_DECL, CursorKind.STRUCT_DECL)
METHOD_KINDS = {
    CursorKind.CXX_METHOD: METHOD,
    CursorKind.CONVERSION_FUNCTION: METHOD,
    CursorKind.CONSTRUCTOR: CONSTRUCTOR,
    CursorKind.DESTRUCTOR: DESTRUCTOR,
}
REF_QUALIFIERS = {RefQualifierKind.LVALUE: "&", RefQualifierKind.RVALUE: "&&"}

# libclang is a shared library loaded once per process.
_library_lock = threading.Lock()

SignatureFlags = collections.namedtuple(
    "SignatureFlags", "is_virtual is_pure_virtual is_static is_final"
)
pure_re = re.compile(r"=\s*0\s*$")


def clang_arguments(cpp_standard=None, include_dirs=(), extra_args=()):
    """Command line handed to libclang."""
    arguments = [
        "-x",
        "c++",
        f"-std={cpp_standard or DEFAULT_STANDARD}",
        # Headers are parsed as main files.
        "-Wno-pragma-once-outside-header",
    ]
    if include_dirs:
        arguments.extend(f"-I{include_dir}" for include_dir in include_dirs)
    else:
        arguments.append("-I.")
    arguments.extend(extra_args)
    return arguments


def uses_nested_namespace_syntax(cpp_standard=None):
    return (cpp_standard or DEFAULT_STANDARD) in NESTED_NAMESPACE_STANDARDS


def signature_flags(declaration):
    """Scan the text of a method declaration for what libclang may miss.

    libclang drops `virtual` from methods with an unknown return type, this
    is a textual second opinion used when parse errors are ignored.

    Returns:
        SignatureFlags or None if ``declaration`` is not a function.

    """
    signature = re.split(r"[;{]", declaration, maxsplit=1)[0]
    head, paren, _ = signature.partition("(")
    if not paren or ")" not in signature:
        return None
    specifiers = head.split()
    trailer = signature[signature.rfind(")") + 1 :]
    qualifiers = trailer.replace("=", " = ").split()
    is_final = "final" in qualifiers
    is_virtual = "virtual" in specifiers or "override" in qualifiers or is_final
    return SignatureFlags(
        is_virtual=is_virtual,
        is_pure_virtual=is_virtual and pure_re.search(trailer) is not None,
        is_static="static" in specifiers,
        is_final=is_final,
    )


def read_source(path):
    """Bytes of the header at ``path``.

    Raises:
        InputNotFound: ``path`` does not exist.
        FileSystemError: ``path`` cannot be read.

    """
    if not os.path.isfile(path):
        raise InputNotFound(path)
    try:
        with open(path, "rb") as source:
            return source.read()
    except OSError as err:
        raise FileSystemError(path, err.strerror or str(err)) from err


def _same_file(name, other):
    return os.path.normcase(os.path.abspath(name)) == os.path.normcase(
        os.path.abspath(other)
    )


def _has_child(cursor, kind):
    return any(child.kind == kind for child in cursor.get_children())


def _is_named(spelling):
    # Recent libclang spells anonymous entities "(anonymous struct at ...)".
    return bool(spelling) and not spelling.startswith("(")


class ClassCollector:
    """Collects the classes defined in the main file of a translation unit."""

    def __init__(self, main_file, contents=b""):
        self.main_file = main_file
        self.contents = contents
        self.classes = []

    def in_main_file(self, cursor):
        location_file = cursor.location.file
        return location_file is not None and _same_file(location_file.name, self.main_file)

    def collect(self, cursor, namespaces=(), scopes=()):
        for child in cursor.get_children():
            if not self.in_main_file(child):
                continue
            if child.kind == CursorKind.NAMESPACE:
                name = child.spelling if _is_named(child.spelling) else ""
                self.collect(child, namespaces + (name,), scopes)
            elif child.kind == CursorKind.LINKAGE_SPEC:
                self.collect(child, namespaces, scopes)
            elif (
                child.kind in CLASS_KINDS
                and child.is_definition()
                and _is_named(child.spelling)
            ):
                self.classes.append(self.class_decl(child, namespaces, scopes))
                self.collect(child, namespaces, scopes + (child.spelling,))
        return self.classes

    def class_decl(self, cursor, namespaces, scopes):
        name = cursor.spelling
        qualified_name = "::".join([ns for ns in namespaces if ns] + list(scopes) + [name])
        members = [child for child in cursor.get_children() if child.kind in METHOD_KINDS]
        indices = overload_indices([member.spelling for member in members])
        methods = tuple(
            self.method_decl(member, index) for member, index in zip(members, indices)
        )
        log.debug("found class %s with %d method(s)", qualified_name, len(methods))
        is_abstract = cursor.is_abstract_record()
        if is_abstract and not any(method.is_pure_virtual for method in methods):
            log.warning(
                "%s is abstract but declares no pure virtual method, "
                "its mock will be abstract too",
                qualified_name,
            )
        return ClassDecl(
            name=name,
            qualified_name=qualified_name,
            namespaces=tuple(namespaces),
            methods=methods,
            is_abstract=is_abstract,
        )

    def declaration_text(self, cursor):
        start, end = cursor.extent.start.offset, cursor.extent.end.offset
        if not 0 <= start < end <= len(self.contents):
            return None
        return self.contents[start:end].decode("utf-8", errors="replace")

    def method_decl(self, cursor, overload_index):
        declaration = self.declaration_text(cursor)
        flags = signature_flags(declaration) if declaration else None
        if flags is None:
            flags = SignatureFlags(False, False, False, False)
        exception_kind = cursor.exception_specification_kind
        return MethodDecl(
            name=cursor.spelling,
            return_type=cursor.result_type.spelling,
            params=tuple(
                ParamDecl(arg.spelling, arg.type.spelling)
                for arg in cursor.get_arguments()
            ),
            is_const=cursor.is_const_method(),
            is_virtual=cursor.is_virtual_method() or flags.is_virtual,
            is_pure_virtual=cursor.is_pure_virtual_method() or flags.is_pure_virtual,
            is_static=cursor.is_static_method() or flags.is_static,
            overload_index=overload_index,
            kind=METHOD_KINDS[cursor.kind],
            is_noexcept=exception_kind == ExceptionSpecificationKind.BASIC_NOEXCEPT,
            ref_qualifier=REF_QUALIFIERS.get(cursor.type.get_ref_qualifier(), ""),
            access=cursor.access_specifier.name.lower(),
            is_final=flags.is_final or _has_child(cursor, CursorKind.CXX_FINAL_ATTR),
        )


class ClangParser:
    """Handle on libclang, passed to whoever needs to parse.

    Args:
        library_file: path to the libclang shared library, None to let the
            bindings find it.
        ignore_errors: log error diagnostics instead of raising ParseError.
        parse_function_bodies: parse inline function bodies too.

    Raises:
        ConfigError: libclang cannot be loaded.

    """

    def __init__(self, library_file=None, ignore_errors=False, parse_function_bodies=False):
        self.ignore_errors = ignore_errors
        self.parse_function_bodies = parse_function_bodies
        with _library_lock:
            if library_file and not Config.loaded:
                Config.set_library_file(library_file)
            elif library_file:
                log.warning("libclang already loaded, ignoring %s", library_file)
            try:
                self.index = Index.create()
            except LibclangError as err:
                raise ConfigError(f"Could not load libclang: {err}") from err

    def parse_file(self, path, args=()):
        """Parse the header at ``path`` into a SourceHeader.

        Raises:
            InputNotFound: ``path`` does not exist.
            FileSystemError: ``path`` cannot be read.
            ParseError: libclang reports an error.

        """
        path = os.path.abspath(path)
        return self._parse(path, read_source(path), args)

    def parse_string(self, content, args=()):
        """Parse in-memory header text, e.g. read from stdin."""
        return self._parse(DUMMY_FILE, content.encode("utf-8"), args, unsaved_text=content)

    def _parse(self, path, contents, args, unsaved_text=None):
        options = 0
        if not self.parse_function_bodies:
            options |= TranslationUnit.PARSE_SKIP_FUNCTION_BODIES
        unsaved = unsaved_text is not None
        log.debug("parsing %s with %s", path, " ".join(args))
        try:
            tu = self.index.parse(
                path,
                args=list(args),
                unsaved_files=[(path, unsaved_text)] if unsaved else None,
                options=options,
            )
        except TranslationUnitLoadError as err:
            raise ParseError(str(err), None if unsaved else path) from err
        diagnostics = self.check_diagnostics(tu)
        classes = ClassCollector(path, contents).collect(tu.cursor)
        return SourceHeader(
            path=None if unsaved else path,
            classes=tuple(classes),
            diagnostics=tuple(diagnostics),
        )

    def check_diagnostics(self, tu):
        """Collect diagnostics, raising ParseError on the first error."""
        diagnostics = []
        for clang_diagnostic in tu.diagnostics:
            severity = SEVERITIES.get(clang_diagnostic.severity)
            if severity is None:
                continue
            location = clang_diagnostic.location
            file = location.file.name if location.file else None
            if file is not None and os.path.basename(file) == DUMMY_FILE:
                file = None
            diagnostics.append(
                Diagnostic(file, location.line, location.column, clang_diagnostic.spelling, severity)
            )
        if not self.ignore_errors:
            for diagnostic in diagnostics:
                if diagnostic.severity != "warning":
                    raise ParseError(
                        diagnostic.message, diagnostic.file, diagnostic.line, diagnostic.column
                    )
        return diagnostics
