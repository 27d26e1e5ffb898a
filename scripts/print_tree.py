from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

from dotenv import load_dotenv

from articletree.forest import build_forest, flatten, option_label
from articletree.server.articles.store import ArticleStore


def parse_args() -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Print the article hierarchy stored in an articletree database.")
    parser.add_argument(
        "--db",
        type=Path,
        default=Path(os.getenv("ARTICLES_DB", "artifacts/articles.db")),
        help="Path to the SQLite article database (default: $ARTICLES_DB or artifacts/articles.db)",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Slug of an article whose subtree should be left out of the listing.",
    )
    parser.add_argument("--json", action="store_true", help="Emit the nested forest as JSON instead of text.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if not args.db.exists():
        raise FileNotFoundError(f"Article database not found: {args.db}")

    store = ArticleStore(args.db)
    exclude_id = None
    if args.exclude:
        excluded = store.get_by_slug(args.exclude)
        if excluded is None:
            raise SystemExit(f"Unknown article slug: {args.exclude}")
        exclude_id = excluded.id

    records = store.list_records()
    forest = build_forest(records)
    if args.json:
        kept = {entry.node.id for entry in flatten(forest, exclude_id=exclude_id)}
        pruned = build_forest(record for record in records if record.id in kept)
        print(json.dumps([node.to_dict() for node in pruned], indent=2))
        return

    for entry in flatten(forest, exclude_id=exclude_id):
        print(f"{option_label(entry.node.title, entry.depth)}  [{entry.node.slug}]")


if __name__ == "__main__":
    main()
