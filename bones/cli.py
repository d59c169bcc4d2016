"""Command line entry point: ``python -m bones <command>``.

Commands::

    init-db              create the schema in the configured database
    seed-demo            insert the demo restaurant
    kitchen [--watch]    print the kitchen overview, optionally refreshing
    table-order ID       print one table order as JSON
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Sequence

from .config import get_settings
from .db import Database, get_database
from .demo import seed_demo
from .obs import configure_logging
from .services.controllers import TableOrderController
from .services.kitchen_board import KitchenBoardPoller, KitchenRow, kitchen_rows

logger = logging.getLogger(__name__)


def _print_rows(rows: List[KitchenRow]) -> None:
    header = KitchenRow("Order", "Arrived", "Customer", "Qty", "Dish", "Notes")
    for row in [header, *rows]:
        print(" | ".join(f"{cell:<16}" for cell in row).rstrip())


def _table_order_json(
    controller: TableOrderController, table_order_id: int
) -> dict | None:
    order = controller.find_table_order_by_id(table_order_id)
    if order is None:
        return None
    return {
        "table_order_id": order.table_order_id,
        "time_of_arrival": order.time_of_arrival.isoformat()
        if order.time_of_arrival
        else None,
        "state": order.state.value,
        "total_table_order_price": str(order.total_table_order_price),
        "amount_due": str(order.calculate_amount_due()),
        "total_amount_paid": str(order.total_amount_paid),
        "order_preparation_time": order.order_preparation_time,
        "is_requesting_service": order.is_requesting_service,
        "personal_orders": [
            {
                "personal_order_id": po.personal_order_id,
                "customer_name": po.customer_name,
                "lines": [
                    {
                        "dish": line.menu_item.name,
                        "quantity": line.quantity,
                        "status": line.status.value,
                        "notes": line.kitchen_notes(),
                    }
                    for line in po.get_personal_order_lines()
                ],
            }
            for po in order.get_personal_orders()
        ],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bones", description="Bone's dining orders")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="Create the database schema")
    sub.add_parser("seed-demo", help="Insert the demo restaurant")
    kitchen = sub.add_parser("kitchen", help="Show orders visible to the kitchen")
    kitchen.add_argument(
        "--watch", action="store_true", help="Keep refreshing until interrupted"
    )
    table_order = sub.add_parser("table-order", help="Show one table order as JSON")
    table_order.add_argument("table_order_id", type=int)
    return parser


def main(argv: Sequence[str] | None = None, database: Database | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    database = database or get_database()

    if args.command == "init-db":
        database.create_schema()
        print("schema ready")
    elif args.command == "seed-demo":
        restaurant = seed_demo(database)
        print(
            json.dumps(
                {
                    "restaurant_code": restaurant.restaurant_code,
                    "tables": [t.table_code for t in restaurant.get_tables()],
                    "menu_cards": [c.menu_card_id for c in restaurant.get_menu_cards()],
                }
            )
        )
    elif args.command == "kitchen":
        controller = TableOrderController(database)
        if not args.watch:
            _print_rows(kitchen_rows(controller.find_all_visible_to_kitchen_table_orders()))
            return 0
        poller = KitchenBoardPoller(controller, _print_rows, initial_delay=0)
        poller.start()
        try:
            while poller.is_running:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            poller.stop()
    elif args.command == "table-order":
        data = _table_order_json(TableOrderController(database), args.table_order_id)
        if data is None:
            print(f"table order {args.table_order_id} not found", file=sys.stderr)
            return 1
        print(json.dumps(data, indent=2))
    return 0
