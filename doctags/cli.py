"""Render docblock annotations of reflected elements to HTML fragments.

Reads YAML reflection dumps (pre-extracted classes, functions and constants with
their raw annotations), runs them through the annotation engine and writes the
rendered descriptions, block tags and source links as a JSON document.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from doctags.deep_merge import deep_merge
from doctags.engine import AnnotationEngine
from doctags.errors import ConfigurationError
from doctags.load_config import load_config
from doctags.load_reflection import load_reflection

logger = logging.getLogger(__name__)

REFLECTION_PATTERNS = ("*.yml", "*.yaml")


def run(args: argparse.Namespace) -> int:
    """Execute the rendering pipeline."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = reflection_files(args.reflection)
    if not paths:
        msg = f"No reflection dumps found under: {args.reflection}"
        raise SystemExit(msg)

    try:
        config = deep_merge(load_config(args.config), _overrides(args))
        store = load_reflection(paths)
        engine = AnnotationEngine(config, store)
        rendered = engine.render_store()
    except ConfigurationError as e:
        raise SystemExit(str(e)) from e

    if args.dry_run:
        print(f"Dry run complete. {len(rendered)} elements rendered.")
        return 0

    out_file = args.out_file.resolve()
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(
        json.dumps({"elements": rendered}, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    engine.render_custom_pages()

    print(f"Rendered {len(rendered)} elements into: {out_file}")
    return 0


def reflection_files(path: Path) -> list[Path]:
    """Return the YAML dumps at a path: the file itself or a directory's dumps."""
    if path.is_file():
        return [path]
    files: set[Path] = set()
    for pattern in REFLECTION_PATTERNS:
        files.update(path.rglob(pattern))
    return sorted(files)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.plugins:
        overrides["plugins"] = list(args.plugins)
    if args.todo:
        overrides["todo"] = True
    if args.internal:
        overrides["internal"] = True
    if args.no_source_code:
        overrides["source_code"] = False
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Run the rendering process."""
    ap = argparse.ArgumentParser(
        description="Render docblock annotations of reflected elements to HTML.",
    )
    ap.add_argument(
        "reflection",
        type=Path,
        help="YAML reflection dump, or a directory containing *.yml dumps",
    )
    ap.add_argument(
        "out_file",
        type=Path,
        help="JSON file receiving the rendered fragments",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--plugin",
        action="append",
        dest="plugins",
        default=[],
        help="Plugin file, directory or module (may be repeated)",
    )
    ap.add_argument(
        "--todo",
        action="store_true",
        help="Render @todo tags",
    )
    ap.add_argument(
        "--internal",
        action="store_true",
        help="Render @internal tags",
    )
    ap.add_argument(
        "--no-source-code",
        action="store_true",
        help="Do not link elements to their highlighted source",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Render everything without writing the output file",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
