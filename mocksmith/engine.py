#!/usr/bin/env python
# encoding: utf-8

"""Mock generation from C++ headers to gMock headers."""

import collections
import logging
import sys

from . import clangparse, filters, output, render
from .errors import (
    DiagnosticWarning,
    EmptyMockWarning,
    FileSystemError,
    InputNotFound,
    ParseError,
)
from .model import MockSpec

log = logging.getLogger(__name__)


class RunResult(collections.namedtuple("RunResult", "artifacts written errors warnings")):
    """Outcome of a run.

    Attributes:
        artifacts: every OutputArtifact produced, printed or not.
        written: artifacts actually printed or written to disk.
        errors: MocksmithError instances, one per failed input or artifact.
        warnings: UserWarning instances.

    """

    __slots__ = ()

    @property
    def ok(self):
        return not self.errors


class MockSmith:
    """Makes gMock headers out of C++ headers.

    Args:
        config: Config of the run.
        parser: ClangParser to use, created from the config when omitted.

    Raises:
        ConfigError: invalid regex, rename rule or option combination.

    """

    def __init__(self, config, parser=None):
        self.config = config.normalized()
        self.class_filter, self.mock_names, self.file_names = self.config.validate()
        self._parser = parser

    @property
    def parser(self):
        if self._parser is None:
            self._parser = clangparse.ClangParser(
                library_file=self.config.libclang,
                ignore_errors=self.config.ignore_errors,
                parse_function_bodies=self.config.parse_function_bodies,
            )
        return self._parser

    @property
    def parser_args(self):
        return clangparse.clang_arguments(
            self.config.cpp_standard, self.config.include_dirs, self.config.clang_args
        )

    def mock_specs(self, header):
        """Filter and name the classes of a SourceHeader.

        Returns:
            (MockSpec list, EmptyMockWarning list)

        """
        specs, warnings = [], []
        for cls in filters.filter_classes(header.classes, self.class_filter):
            spec = MockSpec(
                source=cls,
                mock_name=self.mock_names(cls.name),
                methods=filters.filter_methods(cls, self.config.methods),
            )
            if not spec.methods:
                warnings.append(EmptyMockWarning(cls.qualified_name, spec.mock_name))
            specs.append(spec)
        return specs, warnings

    def render(self, specs):
        simplified = clangparse.uses_nested_namespace_syntax(self.config.cpp_standard)
        return [
            render.render_mock(spec, self.config.indent, simplified) for spec in specs
        ]

    def process(self, header):
        """Rendered mocks and warnings for one parsed header."""
        warnings = [DiagnosticWarning(diagnostic) for diagnostic in header.diagnostics]
        specs, empty = self.mock_specs(header)
        return self.render(specs), warnings + empty

    def mocks_from_string(self, content):
        """Mocks of the classes in header text, e.g. read from stdin.

        Raises:
            ParseError: libclang reports an error.

        """
        header = self.parser.parse_string(content, self.parser_args)
        mocks, warnings = self.process(header)
        for warning in warnings:
            log.warning("%s", warning)
        return mocks

    def run(self, stdout=None):
        """Generate, plan and write the mocks of every input.

        A failing input or artifact is recorded and the others are still
        processed.

        Args:
            stdout: stream receiving the stdout artifact, sys.stdout by default.

        Returns:
            RunResult.

        """
        errors, warnings, units = [], [], []
        for path in self.config.inputs:
            try:
                header = self.parser.parse_file(path, self.parser_args)
            except (InputNotFound, FileSystemError, ParseError) as err:
                log.debug("skipping %s: %s", path, err)
                errors.append(err)
                continue
            mocks, header_warnings = self.process(header)
            for warning in header_warnings:
                log.warning("%s", warning)
            warnings.extend(header_warnings)
            units.append((header, mocks))

        artifacts = output.plan_outputs(
            self.config.output_mode,
            units,
            output_dir=self.config.output_dir,
            output_file=self.config.output_file,
            file_rules=self.file_names,
            include_dirs=self.config.include_dirs,
            msvc_allow_deprecated=self.config.msvc_allow_deprecated,
        )
        written = []
        for artifact in artifacts:
            if artifact.path is None:
                output.print_artifact(artifact, stdout or sys.stdout)
                written.append(artifact)
                continue
            try:
                if output.write_artifact(
                    artifact, self.config.create_output_dir, self.config.always_write
                ):
                    written.append(artifact)
            except FileSystemError as err:
                errors.append(err)
        return RunResult(artifacts, written, errors, warnings)
