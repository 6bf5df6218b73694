#!/usr/bin/env python3
"""
Autoload Generator CLI

Scans PHP files for class, interface and trait declarations and writes the
class map used by the autoloader, either as an autoload.php file or as the
AutoloadClasses field of an extension.json/skin.json registration file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from exporters import ExportError, get_autoload, get_target_fileinfo
from scanner.builder import build_class_map
from scanner.config import GeneratorConfig, load_config
from scanner.discovery import DEFAULT_EXCLUDE_DIRS
from scanner.resolver import PathError


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="autoloadgen",
        description="Generate the autoload class map of a PHP project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoloadgen .                             # Scan the project, update its target file
  autoloadgen . --dir includes --local      # Build $wgAutoloadLocalClasses from includes/
  autoloadgen /srv/mw --mediawiki-default   # MediaWiki core default sources
  autoloadgen . --stdout                    # Print instead of writing
  autoloadgen . --force 'Foo\\Bar=compat/Bar.php'
  autoloadgen . --config autoload.yaml      # Read sources from a config file
        """,
    )

    parser.add_argument(
        "basepath",
        nargs="?",
        default=".",
        help="Root path of the project (default: current directory)",
    )

    # Sources
    parser.add_argument(
        "--dir",
        nargs="+",
        default=[],
        dest="dirs",
        help="Directories to scan recursively for .php and .inc files",
    )

    parser.add_argument(
        "--file",
        nargs="+",
        default=[],
        dest="files",
        help="Individual PHP files to scan",
    )

    parser.add_argument(
        "--force",
        nargs="+",
        default=[],
        metavar="FQCN=PATH",
        help="Force a class to be autoloaded from a specific file",
    )

    parser.add_argument(
        "--mediawiki-default",
        action="store_true",
        help="Scan the MediaWiki core sources (includes, languages, maintenance, mw-config, *.php)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to exclude",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML, TOML or JSON file listing dirs, files, overrides and options",
    )

    # Output options
    parser.add_argument(
        "--local",
        action="store_true",
        help="Build $wgAutoloadLocalClasses instead of $wgAutoloadClasses",
    )

    parser.add_argument(
        "--command-name",
        type=str,
        default=None,
        help="Command name mentioned in the generated file comment",
    )

    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: extension.json, skin.json or autoload.php in the basepath)",
    )

    output.add_argument(
        "--stdout",
        action="store_true",
        help="Print the generated content instead of writing it",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log scanning details to stderr",
    )

    return parser.parse_args(args)


def parse_overrides(values: List[str]) -> Dict[str, str]:
    """
    Parse FQCN=PATH pairs.

    Raises:
        ValueError: If a value has no "=" or an empty side.
    """
    overrides: Dict[str, str] = {}
    for value in values:
        fqcn, sep, path = value.partition("=")
        if not sep or not fqcn or not path:
            raise ValueError(f"Expected FQCN=PATH, got '{value}'")
        overrides[fqcn] = path
    return overrides


def merge_config(parsed, config: Optional[GeneratorConfig]) -> GeneratorConfig:
    """Combine configuration file values with command line options."""
    merged = config or GeneratorConfig()
    merged.dirs = merged.dirs + parsed.dirs
    merged.files = merged.files + parsed.files
    merged.overrides = {**merged.overrides, **parse_overrides(parsed.force)}
    if parsed.exclude_dir:
        merged.exclude_dirs = merged.exclude_dirs + parsed.exclude_dir
    merged.local = merged.local or parsed.local
    merged.mediawiki_default = merged.mediawiki_default or parsed.mediawiki_default
    if parsed.command_name:
        merged.command_name = parsed.command_name
    return merged


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    if parsed.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    basepath = Path(parsed.basepath).resolve()
    if not basepath.is_dir():
        print(f"Error: '{parsed.basepath}' is not a directory", file=sys.stderr)
        return 1

    try:
        config = load_config(Path(parsed.config)) if parsed.config else None
        options = merge_config(parsed, config)
    except ValueError as e:
        print(f"Error reading options: {e}", file=sys.stderr)
        return 1

    # Without explicit sources, scan the whole project
    dirs = options.dirs if options.has_sources() else ["."]

    exclude_dirs = None
    if options.exclude_dirs:
        exclude_dirs = set(options.exclude_dirs) | DEFAULT_EXCLUDE_DIRS

    try:
        class_map = build_class_map(
            basepath=basepath,
            dirs=dirs,
            files=options.files,
            overrides=options.overrides,
            local=options.local,
            mediawiki_default=options.mediawiki_default,
            exclude_dirs=exclude_dirs,
        )
        output = get_autoload(class_map, options.command_name)
    except (PathError, ExportError, OSError) as e:
        print(f"Error scanning project: {e}", file=sys.stderr)
        return 1

    if parsed.stdout:
        sys.stdout.write(output)
        return 0

    output_path = Path(parsed.output) if parsed.output else Path(get_target_fileinfo(class_map.basepath).filename)
    try:
        output_path.write_text(output, encoding="utf-8")
        print(f"Output written to: {output_path}", file=sys.stderr)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
