"""CLI tool to extract LuaDoc annotations into JSON documentation."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from luadoc.adapters.lua_adapter import LuaAdapter
from luadoc.config import JSON_INDENT, LOG_LEVEL
from luadoc.doc.builders import DocModelError
from luadoc.doc.export import export_json
from luadoc.project import ProjectConfigError, parse_project

logger = logging.getLogger(__name__)

EPILOG = """\
project config format:
  {
    "namespace1": ["file1.lua", "lib/**/*.lua"],
    "namespace2": ["file3.lua"]
  }
"""


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="luadoc",
        description="Parse LuaDoc-annotated Lua sources and emit JSON documentation.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p",
        "--project",
        metavar="CONFIG",
        help="Project mode: JSON config mapping namespaces to files / glob patterns",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="FILE [OUTPUT]",
        help="Lua file to parse (single-file mode), then an optional output path. "
        "In project mode only the optional output path.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=JSON_INDENT,
        help=f"JSON indentation, 0 for compact output (default: {JSON_INDENT})",
    )
    return parser


def _write(json_text: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_text)
        logger.info("JSON documentation written to: %s", output)
    else:
        sys.stdout.write(json_text + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()

    if args.project:
        if len(args.paths) > 1:
            parser.error("project mode takes at most one OUTPUT path")
        output = args.paths[0] if args.paths else None
    else:
        if not args.paths:
            parser.error("a Lua FILE is required (or --project CONFIG)")
        if len(args.paths) > 2:
            parser.error("expected FILE [OUTPUT]")
        output = args.paths[1] if len(args.paths) > 1 else None

    try:
        if args.project:
            logger.info("Parsing project from config: %s", args.project)
            doc = parse_project(args.project).doc
        else:
            path = args.paths[0]
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
            doc = LuaAdapter().build_doc_for_code(content, filename=path)
        json_text = export_json(doc, indent=args.indent)
        _write(json_text, output)
    except (DocModelError, ProjectConfigError, OSError) as e:
        raise SystemExit(f"Error generating Lua documentation: {e}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
