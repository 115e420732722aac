#!/usr/bin/env python3
"""
globdeps: Glob files and record the directories searched, for build systems

Common usage:
  globdeps 'src/**/*.py'
  globdeps -o out/srcs.list -d out/srcs.list.d 'src/**/*.py'
  globdeps -o out/srcs.list -d out/srcs.list.d -e '**/test/*' 'src/**/*.py'
  globdeps --print-dirs 'src/*/BUILD'

The list file is only rewritten when its contents change, so it can be used
with ninja `restat`. The depfile lists every directory whose contents can
change the result.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from globdeps.config import ConfigError, apply_config, find_config_file, load_config


@dataclass
class Options:
    """Command-line options for the globdeps tool."""

    pattern: str | None
    output: str | None
    depfile: str | None
    exclude: list[str] | None
    extend_exclude: list[str]
    file_mode: int | None
    print_dirs: bool
    verbose: bool
    version: bool

    @property
    def effective_exclude(self) -> list[str]:
        """Combined exclude patterns: `exclude` + `extend_exclude`."""
        return (self.exclude or []) + self.extend_exclude


def _octal(value: str) -> int:
    try:
        return int(value, 8)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an octal file mode: {value!r}") from None


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)`, where `explicit_flags` names the
    options the user actually passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="globdeps",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pattern",
        nargs="?",
        default=None,
        help="Glob pattern; '**' matches zero or more directories (not as the last element)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        metavar="LIST_FILE",
        help="Write the matched paths to this file, only if they changed (default: print them)",
    )
    parser.add_argument(
        "-d",
        "--depfile",
        type=str,
        default=None,
        metavar="DEP_FILE",
        help="Write a depfile listing the searched directories as dependencies of LIST_FILE",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Exclude paths matching this pattern; replaces configured excludes. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to the configured exclude patterns. Can be repeated",
    )
    parser.add_argument(
        "--file-mode",
        type=_octal,
        default=None,
        dest="file_mode",
        metavar="MODE",
        help="Octal permissions for a newly written list file (e.g. 644)",
    )
    parser.add_argument(
        "--print-dirs",
        action="store_true",
        dest="print_dirs",
        help="Print the searched directories instead of the matches",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # All tracked flags default to None, so presence is simply "not None".
    explicit_flags = {
        name for name in ("exclude", "extend_exclude", "file_mode") if getattr(opts, name) is not None
    }

    return (
        Options(
            pattern=opts.pattern,
            output=opts.output,
            depfile=opts.depfile,
            exclude=opts.exclude,
            extend_exclude=opts.extend_exclude or [],
            file_mode=opts.file_mode,
            print_dirs=opts.print_dirs,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the globdeps CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("globdeps")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options.verbose)

    if options.pattern is None:
        print("Error: No pattern specified. Use --help for more options.", file=sys.stderr)
        return 1
    if options.depfile and not options.output:
        print("Error: --depfile requires --output", file=sys.stderr)
        return 1

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            apply_config(options, load_config(config_path), explicit_flags)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from globdeps.emit import glob_with_dep_file
    from globdeps.globbing import glob

    try:
        if options.output and options.depfile:
            glob_with_dep_file(
                options.pattern,
                options.output,
                options.depfile,
                excludes=options.effective_exclude,
                mode=options.file_mode,
            )
            return 0

        result = glob(options.pattern, options.effective_exclude)
        if options.output:
            from globdeps.emit import format_file_list
            from globdeps.write import write_file_if_changed

            write_file_if_changed(
                options.output, format_file_list(result.matches), mode=options.file_mode
            )
        else:
            for path in result.dirs if options.print_dirs else result.matches:
                print(path)
    except ValueError as e:
        # Pattern errors: bad wildcard syntax or misplaced **.
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # Filesystem and other errors.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
