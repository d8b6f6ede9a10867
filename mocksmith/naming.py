#!/usr/bin/env python
# encoding: utf-8

"""sed style renaming of classes and files.

A rule reads like the sed substitute command, ``s/<regex>/<replacement>/``,
optionally followed by the flags ``g`` (replace every match) and ``i``
(ignore case). Any character may be used as delimiter. The replacement may
refer to capture groups with ``\\1`` to ``\\9`` and to the whole match with
``&``.

Rules are applied as a pipeline: each rule works on the output of the
previous one, and a rule that does not match leaves the string unchanged.

"""

import logging
import os
import re

from .errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_MOCK_NAME_RULES = ("s/.*/Mock&/",)
DEFAULT_FILE_NAME_RULES = ()


def _split_command(command):
    """Split a sed substitute command into pattern, replacement and flags."""
    if len(command) < 2 or command[0] != "s":
        raise ConfigError(
            f"Invalid sed style replacement {command!r}, "
            "expected s/<regex>/<replacement>/"
        )
    delimiter = command[1]
    if delimiter == "\\" or delimiter == "\n":
        raise ConfigError(f"Invalid delimiter in sed style replacement {command!r}")
    fields, current, chars = [], [], iter(command[2:])
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            if escaped == delimiter:
                # The pattern needs the delimiter escaped when it is special
                # to regexes, the replacement never does.
                current.append(re.escape(delimiter) if not fields else delimiter)
            else:
                current.append(char + escaped)
        elif char == delimiter and len(fields) < 2:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    if len(fields) != 2:
        raise ConfigError(
            f"Invalid sed style replacement {command!r}, "
            "expected s/<regex>/<replacement>/"
        )
    pattern, replacement = fields
    return pattern, replacement, "".join(current)


class RenameRule:
    """One compiled substitution."""

    def __init__(self, pattern, replacement, flags=""):
        unknown = set(flags) - set("gi")
        if unknown:
            raise ConfigError(
                f"Unknown flag(s) {''.join(sorted(unknown))!r} in rule for {pattern!r}"
            )
        try:
            self.regex = re.compile(pattern, re.IGNORECASE if "i" in flags else 0)
        except re.error as err:
            raise ConfigError(f"Invalid regex {pattern!r}: {err}") from err
        self.pattern = pattern
        self.replacement = replacement
        self.count = 0 if "g" in flags else 1
        self.parts = self._compile_replacement(replacement)

    @classmethod
    def parse(cls, command):
        """Make a rule from ``s/<regex>/<replacement>/<flags>``."""
        return cls(*_split_command(command))

    def _compile_replacement(self, replacement):
        """Turn the replacement into a list of literal strings and group numbers."""
        parts, literal, chars = [], [], iter(replacement)

        def flush():
            if literal:
                parts.append("".join(literal))
                literal.clear()

        for char in chars:
            if char == "&":
                flush()
                parts.append(0)
            elif char == "\\":
                escaped = next(chars, "\\")
                if escaped.isdigit():
                    group = int(escaped)
                    if group > self.regex.groups:
                        raise ConfigError(
                            f"Invalid reference \\{group} in {replacement!r}, "
                            f"{self.pattern!r} has {self.regex.groups} group(s)"
                        )
                    flush()
                    parts.append(group)
                elif escaped == "n":
                    literal.append("\n")
                else:
                    literal.append(escaped)
            else:
                literal.append(char)
        flush()
        return parts

    def _expand(self, match):
        return "".join(
            part if isinstance(part, str) else (match.group(part) or "")
            for part in self.parts
        )

    def apply(self, text):
        return self.regex.sub(self._expand, text, count=self.count)

    def __repr__(self):
        return f"RenameRule({self.pattern!r}, {self.replacement!r})"


class RenameRules:
    """Ordered pipeline of rename rules. No rule is the identity."""

    def __init__(self, rules=()):
        self.rules = tuple(rules)

    @classmethod
    def parse(cls, commands):
        return cls(RenameRule.parse(command) for command in commands)

    def apply(self, text):
        for rule in self.rules:
            renamed = rule.apply(text)
            if renamed != text:
                log.debug("%r renamed %r to %r", rule, text, renamed)
            text = renamed
        return text

    def __call__(self, text):
        return self.apply(text)


def mock_namer(commands=()):
    """Rules naming mocks from unqualified class names, ``Mock`` prefix by default."""
    return RenameRules.parse(commands or DEFAULT_MOCK_NAME_RULES)


def file_namer(commands=()):
    """Rules naming output files from source file base names, identity by default."""
    return RenameRules.parse(commands or DEFAULT_FILE_NAME_RULES)


def output_file_path(source_path, output_dir, rules):
    """Where the mocks of ``source_path`` are written in per-header mode."""
    return os.path.join(output_dir, rules(os.path.basename(source_path)))
