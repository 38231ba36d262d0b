#!/usr/bin/env python3
"""
Bros Search — query a Bros Unblocked content index from the terminal.

Usage:
    python cli/bros_search.py content.json mario
    python cli/bros_search.py https://example.com/bros-unblocked/content.json "bros" --page 2
    python cli/bros_search.py content.json fun --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from backend.config import settings
from backend.services.content_service import load_content
from backend.services.pagination import paginate
from backend.services.search_service import (
    format_result,
    result_link,
    result_summary,
    search,
)


def _control_line(view) -> str:
    parts = []
    for control in view.controls:
        if control.kind == "current":
            parts.append(f"[{control.label}]")
        else:
            parts.append(control.label)
    return " ".join(parts)


async def run(args: argparse.Namespace) -> int:
    result = await load_content(args.source)
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    view = paginate(search(args.query, result.index), args.page, args.page_size)

    if args.json:
        payload = {
            "query": args.query,
            "total": view.total,
            "page": view.page,
            "total_pages": view.total_pages,
            "results": [
                {
                    "type": r.type,
                    "title": r.record.label,
                    "score": r.score,
                    "url": result_link(r, args.base_url),
                }
                for r in view.items
            ],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    if view.is_empty:
        print("No results found. Try a different search term!")
        return 0

    print(f"{view.total} result(s) for {args.query!r} (page {view.page}/{view.total_pages})")
    for number, r in enumerate(view.items, start=view.start + 1):
        print(f"{number:>3}. {format_result(r)}  [{r.score}]")
        print(f"     {result_link(r, args.base_url)}")
        print(f"     {result_summary(r)}")
    if view.total_pages > 1:
        print(_control_line(view))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Search a Bros Unblocked content index.",
    )
    parser.add_argument("source", help="Path or http(s) URL of content.json")
    parser.add_argument("query", help="Search text (case-insensitive substring)")
    parser.add_argument(
        "--page", type=int, default=1,
        help="Page of results to show (default: 1)",
    )
    parser.add_argument(
        "--page-size", type=int, default=settings.results_per_page,
        help=f"Results per page (default: {settings.results_per_page})",
    )
    parser.add_argument(
        "--base-url", default=settings.base_url,
        help=f"Site prefix for result links (default: {settings.base_url})",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print results as JSON",
    )
    args = parser.parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
