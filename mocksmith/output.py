#!/usr/bin/env python
# encoding: utf-8

"""Assignment of rendered mocks to output artifacts, and writing them."""

import enum
import logging
import os

from . import naming, render
from .errors import FileSystemError
from .model import OutputArtifact

log = logging.getLogger(__name__)


class OutputMode(enum.Enum):
    """Where mock headers go."""

    STDOUT = "stdout"
    PER_HEADER = "per-header"
    COMBINED = "combined"


def plan_outputs(
    mode,
    units,
    output_dir=None,
    output_file=None,
    file_rules=None,
    include_dirs=(),
    msvc_allow_deprecated=False,
):
    """Decide which artifact receives which mocks.

    Args:
        mode: OutputMode.
        units: sequence of (SourceHeader, RenderedMock list) in input order.
        output_dir: target directory in per-header mode.
        output_file: target file in combined mode.
        file_rules: RenameRules turning source base names into output names.
        include_dirs: include directories used to shorten source includes.
        msvc_allow_deprecated: passed on to render.render_header.

    Returns:
        list of OutputArtifact, empty when there is no unit.

    """
    units = list(units)
    if not units:
        return []

    def artifact(path, group):
        sources = tuple(header.path for header, _ in group)
        relative_to = os.path.dirname(os.path.abspath(path)) if path else None
        includes = [
            render.header_include_path(source, include_dirs, relative_to)
            for source in sources
        ]
        mocks = [mock for _, rendered in group for mock in rendered]
        text = render.render_header(sources, mocks, includes, msvc_allow_deprecated)
        return OutputArtifact(path, text, sources)

    if mode is OutputMode.STDOUT:
        return [artifact(None, units)]
    if mode is OutputMode.COMBINED:
        return [artifact(output_file, units)]
    file_rules = file_rules if file_rules is not None else naming.file_namer()
    return [
        artifact(naming.output_file_path(unit[0].path, output_dir, file_rules), [unit])
        for unit in units
    ]


def needs_write(artifact):
    """Whether the file at the artifact path differs from the artifact text."""
    try:
        with open(artifact.path, "rb") as existing:
            return existing.read() != artifact.text.encode("utf-8")
    except FileNotFoundError:
        return True
    except OSError as err:
        raise FileSystemError(artifact.path, err.strerror or str(err)) from err


def ensure_directory(directory, create=True):
    if os.path.isdir(directory):
        return
    if not create:
        raise FileSystemError(directory, "output directory does not exist")
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as err:
        raise FileSystemError(directory, err.strerror or str(err)) from err
    log.debug("created directory %s", directory)


def write_artifact(artifact, create_dirs=True, always_write=False):
    """Write a file artifact unless the file already holds the same text.

    Returns:
        True when the file was written.

    """
    target = os.path.realpath(artifact.path)
    if any(os.path.realpath(source) == target for source in artifact.sources):
        raise FileSystemError(artifact.path, "refusing to overwrite its source header")
    ensure_directory(os.path.dirname(os.path.abspath(artifact.path)), create_dirs)
    if not always_write and not needs_write(artifact):
        log.info("%s is up to date", artifact.path)
        return False
    try:
        with open(artifact.path, "w", encoding="utf-8", newline="\n") as output:
            output.write(artifact.text)
    except OSError as err:
        raise FileSystemError(artifact.path, err.strerror or str(err)) from err
    log.info("wrote %s", artifact.path)
    return True


def print_artifact(artifact, stream):
    stream.write(artifact.text)
