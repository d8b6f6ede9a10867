#!/usr/bin/env python
# encoding: utf-8

"""Selection of the classes and methods to mock."""

import enum
import logging
import re

from .errors import ConfigError
from .model import METHOD

log = logging.getLogger(__name__)


class MethodPolicy(enum.Enum):
    """Which methods of a class get mocked."""

    ALL = "all"
    VIRTUAL = "virtual"
    PURE_VIRTUAL = "pure"

    def selects(self, method):
        """Whether ``method`` is mocked under this policy."""
        if method.kind != METHOD or method.is_static or method.is_final:
            return False
        if self is MethodPolicy.ALL:
            return True
        if self is MethodPolicy.VIRTUAL:
            return method.is_virtual or method.is_pure_virtual
        return method.is_pure_virtual


def filter_methods(cls, policy=MethodPolicy.VIRTUAL):
    """Methods of ``cls`` to mock, in declaration order."""
    return tuple(method for method in cls.methods if policy.selects(method))


def compile_class_filter(pattern):
    """Compile the class inclusion regex, None matches every class."""
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as err:
        raise ConfigError(f"Invalid class filter {pattern!r}: {err}") from err


def filter_classes(classes, pattern=None):
    """Classes whose qualified name matches ``pattern``.

    Args:
        classes: ClassDecl sequence.
        pattern: regex string, compiled regex or None to keep everything.

    """
    if pattern is None:
        return tuple(classes)
    if isinstance(pattern, str):
        pattern = compile_class_filter(pattern)
    selected = []
    for cls in classes:
        if pattern.search(cls.qualified_name):
            selected.append(cls)
        else:
            log.debug("%s excluded by class filter", cls.qualified_name)
    return tuple(selected)
