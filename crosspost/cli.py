"""CLI entry point for crosspost.

Usage:
    crosspost publish --title TITLE --summary TEXT --content-file FILE
                      [--canonical-url URL] [--image-url URL] [--tags a,b]
                      [--platforms twitter,medium]
    crosspost status
    crosspost destinations
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from crosspost.api import handle_publish, status_code
from crosspost.config import PublisherConfig, load_config
from crosspost.factory import build_adapters, build_orchestrator
from crosspost.registry import REGISTRY


def cmd_publish(cfg: PublisherConfig, args: argparse.Namespace) -> int:
    try:
        article = Path(args.content_file).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Cannot read content file: {exc}", file=sys.stderr)
        return 1

    body = {
        "title": args.title,
        "summary": args.summary,
        "content": article,
        "canonicalUrl": args.canonical_url,
        "imageUrl": args.image_url,
        "tags": args.tags,
        "platforms": [p.strip() for p in args.platforms.split(",") if p.strip()],
    }
    response = handle_publish(build_orchestrator(cfg), body)

    if args.json:
        print(json.dumps(response, indent=2))
    elif response["ok"]:
        for r in response["results"]:
            print(f"  [{r['status'].upper()}] {r['platform']}: {r['message']}")
    elif response["kind"] == "validation":
        print("Validation failed:", file=sys.stderr)
        for issue in response["issues"]:
            print(f"  - {issue['field']}: {issue['message']}", file=sys.stderr)
    else:
        print(f"{response['message']} {response['detail']}", file=sys.stderr)

    if status_code(response) != 200:
        return 1
    return 0


def cmd_status(cfg: PublisherConfig) -> int:
    print(f"Live mode: {cfg.live_mode}")
    for key, adapter in build_adapters(cfg).items():
        missing = adapter.missing_credentials()
        state = "configured" if not missing else f"not configured (missing {', '.join(missing)})"
        print(f"{key.value + ':':<10}{state}")
    return 0


def cmd_destinations() -> int:
    for d in REGISTRY.values():
        print(f"{d.key.value:<10}{d.label} ({d.brand_color})")
        print(f"          {d.description}")
        print(f"          Env: {', '.join(d.env_vars)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="crosspost", description="Publish one article to many platforms")
    parser.add_argument("--config", type=Path, default=None, help="Config YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    publish_p = sub.add_parser("publish", help="Publish an article")
    publish_p.add_argument("--title", required=True)
    publish_p.add_argument("--summary", required=True)
    publish_p.add_argument("--content-file", required=True, help="Markdown file with the article body")
    publish_p.add_argument("--canonical-url", default="")
    publish_p.add_argument("--image-url", default="")
    publish_p.add_argument("--tags", default="", help="Comma-separated tags")
    publish_p.add_argument("--platforms", default="twitter,linkedin,medium",
                           help="Comma-separated destination list")
    publish_p.add_argument("--json", action="store_true", help="Print the raw JSON response")

    sub.add_parser("status", help="Show which destinations are configured")
    sub.add_parser("destinations", help="List supported destinations")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.command:
        parser.print_help()
        return 0

    if args.command == "destinations":
        return cmd_destinations()

    cfg = load_config(args.config)
    if args.command == "publish":
        return cmd_publish(cfg, args)
    return cmd_status(cfg)


if __name__ == "__main__":
    sys.exit(main())
