"""CLI interface for logsearch-guard.

Usage:
    # Resolve a time window (stdout: JSON)
    python -m logsearch_guard.cli resolve --from=-15m
    python -m logsearch_guard.cli resolve --to=-2h

    # Mask plain text (stdin → stdout)
    echo 'Call 833-376-1995' | python -m logsearch_guard.cli mask

    # Pretty-print a JSON search result and mask it, as the tool would
    cat results.json | python -m logsearch_guard.cli mask-json

The masking toggle comes from MASK_SENSITIVE_INFO unless the --config
file pins it.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import create_masker, load_config, load_from_yaml
from .masker import PatternMasker
from .search import safe_stringify
from .timerange import resolve_time_range


def _build_masker(args: argparse.Namespace) -> PatternMasker:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    return create_masker(cfg)


def cmd_resolve(args: argparse.Namespace) -> None:
    """Print the resolved time range as JSON."""
    resolved = resolve_time_range(args.from_, args.to)
    json.dump(resolved.as_dict(), sys.stdout)
    sys.stdout.write("\n")


def cmd_mask(args: argparse.Namespace) -> None:
    """Mask PII in plain text on stdin."""
    masker = _build_masker(args)
    sys.stdout.write(masker.mask(sys.stdin.read()))


def cmd_mask_json(args: argparse.Namespace) -> None:
    """Mask PII in a JSON document on stdin."""
    masker = _build_masker(args)
    data = json.loads(sys.stdin.read())
    sys.stdout.write(masker.mask(safe_stringify(data)))
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="logsearch_guard",
        description="Time-window resolution and PII masking for log search results",
    )
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    p_resolve = sub.add_parser("resolve", help="Resolve --from/--to into timestamps")
    # Relative tokens start with '-', so they have to be passed as --from=-15m
    p_resolve.add_argument("--from", dest="from_", default=None, help="Start (e.g. -15m, now, ISO 8601)")
    p_resolve.add_argument("--to", default=None, help="End (e.g. now, -2h, ISO 8601)")
    sub.add_parser("mask", help="Mask plain text (stdin)")
    sub.add_parser("mask-json", help="Pretty-print and mask a JSON document (stdin)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "resolve": cmd_resolve,
        "mask": cmd_mask,
        "mask-json": cmd_mask_json,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
