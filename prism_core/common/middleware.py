# prism_core/common/middleware.py
from __future__ import annotations

import logging
import time

from django.conf import settings
from django.db import connection

logger = logging.getLogger(__name__)

SQL_LOG_CHARS = 120
SLOW_SQL_LOG_CHARS = 80


class QueryTimer:
    """
    connection.execute_wrapper hook: warns on slow statements and logs
    failing ones before re-raising.
    """

    def __init__(self, slow_ms: int):
        self.slow_ms = slow_ms

    def __call__(self, execute, sql, params, many, context):
        start = time.monotonic()
        try:
            return execute(sql, params, many, context)
        except Exception as exc:
            logger.error("DB query error: %s | Query: %s", exc, str(sql)[:SQL_LOG_CHARS])
            raise
        finally:
            elapsed_ms = (time.monotonic() - start) * 1000
            if elapsed_ms > self.slow_ms:
                logger.warning("Slow query (%dms): %s", elapsed_ms, str(sql)[:SLOW_SQL_LOG_CHARS])


class QueryDiagnosticsMiddleware:
    """
    Logs one line per request (METHOD path status ms) and wraps every SQL
    statement issued while serving it with QueryTimer.

    The health check is not logged.
    """

    QUIET_PATHS = ("/api/ping/",)

    def __init__(self, get_response):
        self.get_response = get_response
        self.slow_ms = int(getattr(settings, "PRISM_SLOW_QUERY_MS", 500))

    def __call__(self, request):
        start = time.monotonic()
        with connection.execute_wrapper(QueryTimer(self.slow_ms)):
            response = self.get_response(request)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if request.path not in self.QUIET_PATHS:
            logger.info("%s %s %s %dms", request.method, request.path, response.status_code, elapsed_ms)
        return response
