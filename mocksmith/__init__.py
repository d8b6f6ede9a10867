#!/usr/bin/env python
# encoding: utf-8

"""libclang based gMock class generator for C++ headers."""

__version__ = "0.1"  # UPDATE setup.py when changing version.
__author__ = "mocksmith developers"
__license__ = "MIT"

from .config import Config  # noqa: E402
from .engine import MockSmith, RunResult  # noqa: E402
from .errors import (  # noqa: E402
    ConfigError,
    EmptyMockWarning,
    FileSystemError,
    InputNotFound,
    MocksmithError,
    ParseError,
)
from .filters import MethodPolicy  # noqa: E402
from .output import OutputMode  # noqa: E402
