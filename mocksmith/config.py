#!/usr/bin/env python
# encoding: utf-8

"""Run configuration."""

import collections

from . import naming
from .clangparse import STANDARDS
from .errors import ConfigError
from .filters import MethodPolicy, compile_class_filter
from .output import OutputMode
from .render import DEFAULT_INDENT

_FIELDS = collections.OrderedDict(
    [
        ("inputs", ()),
        ("output_mode", OutputMode.STDOUT),
        ("output_dir", None),
        ("output_file", None),
        ("methods", MethodPolicy.VIRTUAL),
        ("class_filter", None),
        ("name_mock", ()),
        ("name_output_file", ()),
        ("include_dirs", ()),
        ("clang_args", ()),
        ("cpp_standard", None),
        ("create_output_dir", True),
        ("always_write", False),
        ("ignore_errors", False),
        ("msvc_allow_deprecated", False),
        ("indent", DEFAULT_INDENT),
        ("libclang", None),
        ("parse_function_bodies", False),
    ]
)


class Config(collections.namedtuple("Config", list(_FIELDS), defaults=list(_FIELDS.values()))):
    """Everything a run of the generator depends on.

    Enum fields also accept their string values, e.g. ``methods="pure"``.

    """

    __slots__ = ()

    def normalized(self):
        """Copy with enum fields converted from strings.

        Raises:
            ConfigError: unknown output mode or method policy.

        """
        try:
            return self._replace(
                output_mode=OutputMode(self.output_mode),
                methods=MethodPolicy(self.methods),
            )
        except ValueError as err:
            raise ConfigError(str(err)) from err

    def validate(self):
        """Check option combinations and compile the regexes.

        Returns:
            (class filter regex or None, mock RenameRules, file RenameRules)

        Raises:
            ConfigError: on the first problem found.

        """
        mode = OutputMode(self.output_mode)
        if mode is OutputMode.PER_HEADER and not self.output_dir:
            raise ConfigError("An output directory is required to write one file per header")
        if mode is OutputMode.COMBINED and not self.output_file:
            raise ConfigError("An output file is required to combine all mocks")
        if self.name_output_file and mode is not OutputMode.PER_HEADER:
            raise ConfigError("Output files can only be renamed with an output directory")
        if self.cpp_standard is not None and self.cpp_standard not in STANDARDS:
            raise ConfigError(f"Unknown C++ standard {self.cpp_standard!r}")
        return (
            compile_class_filter(self.class_filter),
            naming.mock_namer(self.name_mock),
            naming.file_namer(self.name_output_file),
        )
