#!/usr/bin/env python
# encoding: utf-8

"""Errors and warnings reported while generating mocks."""


class MocksmithError(Exception):
    """Base class of all fatal mocksmith errors."""

    kind = "Error"

    def __str__(self):
        return f"{self.kind}: {self.describe()}"

    def describe(self):
        return super().__str__()


class InputNotFound(MocksmithError):
    """A header given as input does not exist."""

    kind = "Input not found"

    def __init__(self, path):
        super().__init__(path)
        self.path = path

    def describe(self):
        return str(self.path)


class ParseError(MocksmithError):
    """libclang reported an error in a header or in a file it includes.

    Args:
        message: diagnostic text.
        file: file in which the diagnostic occurred, None for in-memory input.
        line: 1-based line, 0 when unknown.
        column: 1-based column, 0 when unknown.

    """

    kind = "Parse error"

    def __init__(self, message, file=None, line=0, column=0):
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.column = column

    def describe(self):
        if self.file is None:
            location = f"line {self.line}, column {self.column}"
        else:
            location = f"{self.file}:{self.line}:{self.column}"
        return f"{location}: {self.message}"

    def __eq__(self, other):
        if not isinstance(other, ParseError):
            return NotImplemented
        return (self.message, self.file, self.line, self.column) == (
            other.message,
            other.file,
            other.line,
            other.column,
        )

    __hash__ = MocksmithError.__hash__


class ConfigError(MocksmithError):
    """Invalid regex, rename rule or option combination."""

    kind = "Configuration error"


class FileSystemError(MocksmithError):
    """An output directory or file could not be created or written."""

    kind = "File system error"

    def __init__(self, path, reason):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def describe(self):
        return f"{self.path}: {self.reason}"


class DiagnosticWarning(UserWarning):
    """Non fatal diagnostic from libclang, or an error that was ignored."""

    def __init__(self, diagnostic):
        super().__init__(diagnostic)
        self.diagnostic = diagnostic

    def __str__(self):
        diagnostic = self.diagnostic
        return (
            f"{diagnostic.file or '<stdin>'}:{diagnostic.line}:{diagnostic.column}: "
            f"{diagnostic.severity}: {diagnostic.message}"
        )


class EmptyMockWarning(UserWarning):
    """A class yielded no method to mock."""

    def __init__(self, class_name, mock_name):
        super().__init__(class_name, mock_name)
        self.class_name = class_name
        self.mock_name = mock_name

    def __str__(self):
        return (
            f"No methods to mock in {self.class_name}, "
            f"{self.mock_name} will be empty"
        )
