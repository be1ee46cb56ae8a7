"""
Entry point for the WordPress to Jekyll export tool.
"""

import argparse
import os
import sys

from pydantic import ValidationError

from wxr2jekyll.config import load_config
from wxr2jekyll.export_tool import JekyllExportTool

CONFIG_FILE = "config.yaml"


def main(argv=None) -> int:
    """
    Parse the command line, load the configuration and run the export.
    Returns the process exit status.
    """
    parser = argparse.ArgumentParser(description="Convert a WordPress export file to Jekyll.")
    parser.add_argument(
        "config_file",
        nargs="?",
        help=f"The name of the config file to use (defaults to {CONFIG_FILE})",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppresses the normal output.")
    parser.add_argument("--pandoc", help="The name of the pandoc executable.")
    args = parser.parse_args(argv)

    config_file = args.config_file or CONFIG_FILE
    if args.config_file and not os.path.exists(config_file):
        print(f"error: cannot open config file: {config_file}", file=sys.stderr)
        return 1

    try:
        config = load_config(config_file, quiet=args.quiet or None, pandoc=args.pandoc)
    except (ValidationError, ValueError) as e:
        print(f"error: invalid config file {config_file}: {e}", file=sys.stderr)
        return 1

    tool = JekyllExportTool(config)
    failed = tool.run()
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
