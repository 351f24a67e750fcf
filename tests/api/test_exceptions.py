"""
Error classifier/responder: status, body and log records for each error kind.
"""

import json
import logging

import pytest
from unittest.mock import patch
from fastapi import APIRouter
from fastapi.testclient import TestClient
from starlette.requests import Request

from src.api.exceptions import LoggingEventSink, get_event_sink, respond_to_error
from src.core.errors import AppError, BusinessError, ErrorKind, InfrastructureError

MASKED_503 = b'{"statusCode":503,"msg":"service temporarily unavailable"}'
MASKED_500 = b'{"statusCode":500,"msg":"internal server error"}'


def make_request(app, path="/some/path"):
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": b"",
            "headers": [],
            "app": app,
        }
    )


@pytest.mark.parametrize(
    "payload",
    [
        "plain message",
        {"username": "username is required", "email": "email is invalid"},
        ["a", 1, None, True],
        {"nested": {"items": [1, 2, {"deep": "x"}]}},
        0,
    ],
)
def test_business_error_echoes_status_and_payload(app, sink, payload):
    response = respond_to_error(make_request(app), BusinessError(409, payload), sink)

    assert response.status_code == 409
    assert json.loads(response.body) == {"statusCode": 409, "msg": payload}
    assert sink.records == []


@pytest.mark.parametrize(
    "service_name, detail",
    [
        ("Database", "failed to connect to database"),
        ('"}', '{"statusCode":200,"msg":"leak"}'),
        ("Cache\n", "line1\nline2\t\\\u0000"),
        ("", ""),
        ("Ünïcødé", "密码=hunter2"),
    ],
)
def test_infrastructure_error_is_masked(app, sink, service_name, detail):
    request = make_request(app, "/orders/42")

    response = respond_to_error(
        request, InfrastructureError(service_name, detail), sink
    )

    assert response.status_code == 503
    assert response.body == MASKED_503
    assert response.headers["content-type"] == "application/json"
    assert sink.records == [
        (
            "Infrastructure error",
            {"service": service_name, "detail": detail, "path": "/orders/42"},
        )
    ]


@pytest.mark.parametrize(
    "exc",
    [
        RuntimeError("boom: secret token abc"),
        KeyError("missing"),
        ValueError(""),
        AppError("bare app error"),
    ],
)
def test_unclassified_error_is_masked(app, sink, exc):
    response = respond_to_error(make_request(app, "/x"), exc, sink)

    assert response.status_code == 500
    assert response.body == MASKED_500
    assert sink.records == [("Unknown error", {"err": str(exc), "path": "/x"})]


def test_lookalike_of_business_error_is_unclassified(app, sink):
    class LooksLikeBusiness(Exception):
        status_code = 400
        payload = "db password is hunter2"

    response = respond_to_error(make_request(app), LooksLikeBusiness("x"), sink)

    assert response.status_code == 500
    assert b"hunter2" not in response.body
    assert len(sink.records) == 1


def test_forged_kind_tag_is_unclassified(app, sink):
    class Forged(AppError):
        kind = ErrorKind.BUSINESS

    response = respond_to_error(make_request(app), Forged("leak"), sink)

    assert response.status_code == 500
    assert response.body == MASKED_500


def test_logging_sink_emits_one_error_record(caplog):
    sink = LoggingEventSink()

    with caplog.at_level(logging.ERROR, logger="src.api.exceptions"):
        sink.record("Infrastructure error", service="Database", detail="down", path="/p")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert record.service == "Database"
    assert record.detail == "down"
    assert record.path == "/p"
    assert "Infrastructure error" in record.getMessage()


def test_get_event_sink_defaults_to_logging(app):
    del app.state.event_sink

    assert isinstance(get_event_sink(make_request(app)), LoggingEventSink)


def test_global_handler_covers_plain_routes(app, sink):
    plain = APIRouter()

    @plain.get("/plain")
    async def plain_route():
        raise InfrastructureError("Queue", "broker unreachable")

    app.include_router(plain)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/plain")

    assert response.status_code == 503
    assert response.json() == {
        "statusCode": 503,
        "msg": "service temporarily unavailable",
    }
    assert sink.records == [
        (
            "Infrastructure error",
            {"service": "Queue", "detail": "broker unreachable", "path": "/plain"},
        )
    ]


def test_business_body_comes_from_the_error(app, sink):
    err = BusinessError(418, "short and stout")

    with patch.object(
        BusinessError, "to_response", return_value={"statusCode": 418, "msg": "teapot"}
    ) as mock_to_response:
        response = respond_to_error(make_request(app), err, sink)

    mock_to_response.assert_called_once_with()
    assert response.status_code == 418
    assert json.loads(response.body) == {"statusCode": 418, "msg": "teapot"}
