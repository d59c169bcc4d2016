from __future__ import annotations

import hashlib
import logging
import random
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from ..config import get_settings

SAMPLE_RATE = 0.01

logger = logging.getLogger("bones.obs")


def add_query_logger(engine: Engine, label: str, slow_query_ms: int | None = None) -> None:
    """Attach timing-based logging to ``engine`` tagged with ``label``."""
    threshold = (
        slow_query_ms if slow_query_ms is not None else get_settings().slow_query_ms
    )

    def before_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        context._query_start_time = time.perf_counter()

    def after_cursor_execute(
        conn, cursor, statement, parameters, context, executemany
    ):  # type: ignore[no-untyped-def]
        total_ms = (time.perf_counter() - context._query_start_time) * 1000
        sql = " ".join(statement.split())
        if len(sql) > 200:
            sql = sql[:197] + "..."
        params_hash = hashlib.sha256(repr(parameters).encode()).hexdigest()[:8]
        if total_ms > threshold:
            logger.warning(
                "slow query %dms db=%s sql=%s params=%s",
                int(total_ms),
                label,
                sql,
                params_hash,
            )
        elif random.random() < SAMPLE_RATE:
            logger.info(
                "query %dms db=%s sql=%s params=%s",
                int(total_ms),
                label,
                sql,
                params_hash,
            )

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine, "after_cursor_execute", after_cursor_execute)
