"""
Inspect and maintain custom display orders.

    python scripts/order_tool.py show team
    python scripts/order_tool.py set gallery-images 4 2 9
    python scripts/order_tool.py set gallery-images          # clear
    python scripts/order_tool.py prune gallery-videos --dry-run

`prune` drops ids from the order record that no longer match a stored
entity. The public listing tolerates such ids, so this is housekeeping only.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backoffice.cache import CACHE_TAGS
from backoffice.config import get_settings
from backoffice.db import ContentKind, ContentStore
from backoffice.dependencies import get_content_store, get_order_store, get_tag_cache
from backoffice.ordering import (
    OrderStore,
    OrderStoreError,
    namespace_for,
    remove_id,
    replace_order,
)


logger = logging.getLogger(__name__)


def resolve_namespace(kind: ContentKind) -> str:
    namespace = namespace_for(kind, get_settings().ordered_kinds)
    if namespace is None:
        raise SystemExit(f"Custom ordering is not enabled for {kind.value}")
    return namespace


def stale_ids(
    store: ContentStore, orders: OrderStore, kind: ContentKind, namespace: str
) -> list[str]:
    known = {str(record.id) for record in store.list_by_created_desc(kind)}
    return [entity_id for entity_id in orders.get_order(namespace) if entity_id not in known]


def prune(
    store: ContentStore,
    orders: OrderStore,
    kind: ContentKind,
    namespace: str,
    *,
    dry_run: bool,
) -> list[str]:
    stale = stale_ids(store, orders, kind, namespace)
    if not dry_run:
        for entity_id in stale:
            remove_id(orders, namespace, entity_id)
    return stale


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Manage custom display orders")
    sub = parser.add_subparsers(dest="command", required=True)
    kinds = [kind.value for kind in ContentKind]

    show = sub.add_parser("show", help="Print the order record")
    show.add_argument("kind", choices=kinds)

    set_cmd = sub.add_parser("set", help="Replace the order record")
    set_cmd.add_argument("kind", choices=kinds)
    set_cmd.add_argument("ids", nargs="*", help="Entity ids, first shown first")

    prune_cmd = sub.add_parser("prune", help="Drop ids of deleted entities")
    prune_cmd.add_argument("kind", choices=kinds)
    prune_cmd.add_argument(
        "--dry-run",
        action="store_true",
        help="Report stale ids without removing them",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    kind = ContentKind(args.kind)
    namespace = resolve_namespace(kind)
    orders = get_order_store()

    try:
        if args.command == "show":
            ids = orders.get_order(namespace)
            print(" ".join(ids) if ids else "(creation order)")
        elif args.command == "set":
            ids = replace_order(orders, namespace, args.ids)
            get_tag_cache().invalidate(CACHE_TAGS[kind])
            logger.info("Set %s to %s", namespace, ids or "(creation order)")
        else:
            stale = prune(
                get_content_store(), orders, kind, namespace, dry_run=args.dry_run
            )
            if stale and not args.dry_run:
                get_tag_cache().invalidate(CACHE_TAGS[kind])
            verb = "Would remove" if args.dry_run else "Removed"
            logger.info("%s %d stale ids from %s: %s", verb, len(stale), namespace, stale)
    except OrderStoreError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
