import logging

import pytest
from django.db import OperationalError
from rest_framework.test import APIClient

from prism_core.common.middleware import QueryTimer


def test_slow_query_is_warned(caplog):
    timer = QueryTimer(slow_ms=-1)
    with caplog.at_level(logging.WARNING, logger="prism_core"):
        out = timer(lambda sql, params, many, context: "rows", "SELECT 1", None, False, {})

    assert out == "rows"
    assert any(r.getMessage().startswith("Slow query") for r in caplog.records)


def test_fast_query_is_quiet(caplog):
    timer = QueryTimer(slow_ms=60_000)
    with caplog.at_level(logging.WARNING, logger="prism_core"):
        timer(lambda sql, params, many, context: None, "SELECT 1", None, False, {})
    assert not caplog.records


def test_failing_query_is_logged_truncated_and_reraised(caplog):
    sql = "SELECT " + "x" * 500

    def boom(sql, params, many, context):
        raise OperationalError("bad")

    timer = QueryTimer(slow_ms=60_000)
    with caplog.at_level(logging.ERROR, logger="prism_core"):
        with pytest.raises(OperationalError):
            timer(boom, sql, None, False, {})

    logged = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert logged
    assert sql[:120] in logged[0]
    assert sql[:121] not in logged[0]


@pytest.mark.django_db
def test_request_line_logged_except_ping(caplog, api_client_for):
    client = api_client_for("resident")
    with caplog.at_level(logging.INFO, logger="prism_core.common.middleware"):
        client.get("/api/v1/search/", {"q": "zz"})
        APIClient().get("/api/ping/")

    lines = [r.getMessage() for r in caplog.records if r.name == "prism_core.common.middleware"]
    assert any(line.startswith("GET /api/v1/search/ 200") for line in lines)
    assert not any("/api/ping/" in line for line in lines)
