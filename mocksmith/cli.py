#!/usr/bin/env python
# encoding: utf-8

"""Command line interface."""

import logging
import sys

import click

from . import __version__, render
from .clangparse import STANDARDS
from .config import Config
from .engine import MockSmith
from .errors import ConfigError, ParseError
from .filters import MethodPolicy
from .output import OutputMode

log = logging.getLogger(__name__)


def setup_logging(verbose=False, silent=False):
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif silent:
        level = logging.ERROR
    logging.basicConfig(
        stream=sys.stderr, level=level, format="%(levelname)s: %(message)s", force=True
    )


@click.command()
@click.version_option(__version__, prog_name="mocksmith")
@click.argument("headers", nargs=-1, type=click.Path(dir_okay=False), metavar="[HEADER]...")
@click.option(
    "-I",
    "--include-dir",
    "include_dirs",
    multiple=True,
    type=click.Path(file_okay=False),
    help="directory to search for includes, also used to include the mocked header",
)
@click.option(
    "-n",
    "--name-mock",
    multiple=True,
    help=r"sed style rule naming mocks after classes, e.g. 's/I(.*)/Mock\1/'",
)
@click.option(
    "-f",
    "--name-output-file",
    multiple=True,
    help="sed style rule naming output files after headers (needs --output-dir)",
)
@click.option(
    "-o", "--output-file", type=click.Path(dir_okay=False), help="write all mocks to one file"
)
@click.option(
    "-d",
    "--output-dir",
    type=click.Path(file_okay=False),
    help="write one file per header to this directory",
)
@click.option("-w", "--always-write", is_flag=True, help="write files even when unchanged")
@click.option(
    "--create-dir/--no-create-dir",
    default=True,
    show_default=True,
    help="create missing output directories",
)
@click.option("--std", "cpp_standard", type=click.Choice(STANDARDS), help="C++ standard")
@click.option(
    "--methods",
    type=click.Choice([policy.value for policy in MethodPolicy]),
    default=MethodPolicy.VIRTUAL.value,
    show_default=True,
    help="which methods to mock",
)
@click.option("--class-filter", help="regex selecting classes by qualified name")
@click.option(
    "--clang-arg", "clang_args", multiple=True, help="extra argument passed to libclang"
)
@click.option(
    "--libclang",
    type=click.Path(dir_okay=False),
    envvar="CLANG_LIBRARY_FILE",
    help="path to the libclang shared library",
)
@click.option(
    "--msvc-allow-deprecated",
    is_flag=True,
    help="silence MSVC warnings about overriding deprecated methods",
)
@click.option(
    "--ignore-errors",
    is_flag=True,
    help="mock despite parse errors, unknown types may then show up as int",
)
@click.option("--indent", type=click.IntRange(min=0), default=2, show_default=True)
@click.option("-v", "--verbose", is_flag=True, help="print debug information")
@click.option("-s", "--silent", is_flag=True, help="only print errors")
def main(
    headers,
    include_dirs,
    name_mock,
    name_output_file,
    output_file,
    output_dir,
    always_write,
    create_dir,
    cpp_standard,
    methods,
    class_filter,
    clang_args,
    libclang,
    msvc_allow_deprecated,
    ignore_errors,
    indent,
    verbose,
    silent,
):
    """Generate gMock classes from the classes of C++ headers.

    Mocks are printed as a complete header unless --output-file or
    --output-dir is given. Without HEADER, the header text is read from
    stdin and only the mock classes are printed.

    """
    if verbose and silent:
        raise click.UsageError("--verbose and --silent are mutually exclusive")
    if output_file and output_dir:
        raise click.UsageError("--output-file and --output-dir are mutually exclusive")
    if not headers and (output_file or output_dir):
        raise click.UsageError("HEADER is required with --output-file or --output-dir")
    setup_logging(verbose, silent)

    output_mode = OutputMode.STDOUT
    if output_file:
        output_mode = OutputMode.COMBINED
    elif output_dir:
        output_mode = OutputMode.PER_HEADER
    config = Config(
        inputs=headers,
        output_mode=output_mode,
        output_dir=output_dir,
        output_file=output_file,
        methods=methods,
        class_filter=class_filter,
        name_mock=name_mock,
        name_output_file=name_output_file,
        include_dirs=include_dirs,
        clang_args=clang_args,
        cpp_standard=cpp_standard,
        create_output_dir=create_dir,
        always_write=always_write,
        ignore_errors=ignore_errors,
        msvc_allow_deprecated=msvc_allow_deprecated,
        indent=" " * indent,
        libclang=libclang,
    )
    try:
        mocksmith = MockSmith(config)
    except ConfigError as err:
        raise click.UsageError(err.describe()) from err

    try:
        if not headers:
            mocks = mocksmith.mocks_from_string(click.get_text_stream("stdin").read())
            click.echo(render.join_mocks(mocks), nl=False)
            return 0
        result = mocksmith.run()
    except (ConfigError, ParseError) as err:
        raise click.ClickException(str(err)) from err

    for error in result.errors:
        click.echo(f"Error: {error}", err=True)
    if not result.ok:
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
