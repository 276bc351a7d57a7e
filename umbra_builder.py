"""
umbra_builder.py – Command line builder for tagged scripts

Reads a tagged source (local path or URL, or a version from the manifest),
reports its tags with measured sizes, and compiles it for a chosen set of
tags plus everything they require.

FEATURES:
- Local files, file:// and HTTP(S) sources, optional proxy
- Linked tag sources fetched concurrently
- Per-tag size report (--list)
- Optional minification and pretty-printing of the compiled output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from config_manager import get_builder_config, get_postprocess_config
from builder_service import (
    BuilderError,
    BuilderService,
    build_session,
    fetch_manifest,
    make_fetcher,
    setup_logging,
    stop_logging,
    tag_table,
)

__version__ = "0.1.0"

_LOG = logging.getLogger("umbra_builder")


# ---------------------------------------------------------------------------
# CLI parsing
# ---------------------------------------------------------------------------

def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    builder_config = get_builder_config()
    postprocess_config = get_postprocess_config()

    p = argparse.ArgumentParser(
        description="Compile a tagged script down to the selected tags and their dependencies.",
        epilog="""
Examples:
  List tags and their sizes:
    %(prog)s umbra.js --list

  Compile with two features, minified:
    %(prog)s umbra.js --tags CANVAS AUDIO --minify --output umbra.min.js

  Compile a version listed in the manifest:
    %(prog)s --manifest https://example.com/api/api.json --version 1.2.0 --tags CANVAS
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "source",
        nargs="?",
        default="",
        help="Tagged source: local path, file:// URL or HTTP(S) URL",
    )
    p.add_argument("--manifest", default=builder_config.manifest_url, help="Version manifest URL")
    p.add_argument("--version", dest="version_name", help="Build this version from the manifest")
    p.add_argument("--tags", nargs="*", default=[], help="Tags to include")
    p.add_argument("--list", action="store_true", help="List tags with sizes and exit")
    p.add_argument(
        "--minify",
        action=argparse.BooleanOptionalAction,
        default=postprocess_config.minify,
        help="Minify the compiled output",
    )
    p.add_argument(
        "--format",
        action=argparse.BooleanOptionalAction,
        default=postprocess_config.format,
        help="Pretty-print the compiled output",
    )
    p.add_argument(
        "--output",
        default=builder_config.output_name,
        help="Output file, '-' for stdout (default: %(default)s)",
    )
    p.add_argument("--proxy", default=builder_config.proxy_url, help="Proxy URL for remote sources")
    p.add_argument(
        "--workers",
        type=int,
        default=builder_config.max_workers,
        help="Concurrent fetches of linked sources",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=builder_config.fetch_timeout,
        help="Fetch timeout in seconds",
    )
    p.add_argument("--debug", action="store_true", help="Verbose logging")
    return p.parse_args(argv)


def format_tag_table(rows: List[dict]) -> str:
    """Render tag rows as aligned text columns."""
    if not rows:
        return "(no tags defined)"
    width = max(len(row["name"]) for row in rows)
    lines = [f"{'NAME'.ljust(width)}  {'SIZE':>10}  DESCRIPTION"]
    for row in rows:
        size = f"{row['size']} bytes"
        lines.append(f"{row['name'].ljust(width)}  {size:>10}  {row['description']}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: List[str] | None = None) -> None:
    args = _parse_args(argv)
    setup_logging(args.debug)

    _LOG.info("🚀  umbra_builder %s", __version__)

    fetch = make_fetcher(build_session(args.proxy), timeout=args.timeout)
    builder = BuilderService(fetch=fetch, max_workers=args.workers, show_progress=True)

    try:
        source = args.source
        if not source:
            if not args.version_name:
                _LOG.error("A source or --version is required.")
                sys.exit(2)
            entry = fetch_manifest(args.manifest, fetch=fetch).find(args.version_name)
            if entry is None:
                _LOG.error("Version %s is not listed in %s", args.version_name, args.manifest)
                sys.exit(1)
            source = entry.source

        script = builder.load_script(source)

        if args.list:
            print(format_tag_table(tag_table(script)))
            return

        output = builder.build(source, args.tags, minify=args.minify, format=args.format)
    except BuilderError as exc:
        _LOG.error("❌  %s", exc)
        sys.exit(1)

    if args.output == "-":
        sys.stdout.write(output)
    else:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output, encoding="utf-8")
        _LOG.info("✅  Compiled %d bytes to %s", len(output.encode("utf-8")), out_path)


if __name__ == "__main__":  # pragma: no cover
    try:
        main()
    except KeyboardInterrupt:
        _LOG.info("🛑  Interrupted by user.")
        sys.exit(130)
    finally:
        stop_logging()
