import json
import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from till.app.middlewares.logging import RequestLogMiddleware
from till.app.obs.logging import JsonFormatter


def _api_messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "api"]


def _make_app():
    test_app = FastAPI()
    test_app.add_middleware(RequestLogMiddleware)

    @test_app.get("/health")
    async def health():
        return {"ok": True}

    @test_app.get("/boom")
    async def boom():
        raise RuntimeError("paper jam")

    return test_app


def test_request_id_propagation(monkeypatch, caplog):
    monkeypatch.setattr("till.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/health", headers={"X-Request-ID": "abc"})
    assert resp.headers["X-Request-ID"] == "abc"
    data = json.loads(_api_messages(caplog)[-1])
    assert data["req_id"] == "abc"
    assert data["status"] == 200
    assert data["route"] == "/health"


def test_request_id_generation(monkeypatch, caplog):
    monkeypatch.setattr("till.app.middlewares.logging.LOG_SAMPLE_2XX", 1)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/health")
    rid = resp.headers["X-Request-ID"]
    assert rid
    assert json.loads(_api_messages(caplog)[-1])["req_id"] == rid


def test_2xx_sampling_skips_catalog_polls(monkeypatch, caplog):
    monkeypatch.setattr("till.app.middlewares.logging.LOG_SAMPLE_2XX", 0)
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        for _ in range(5):
            client.get("/health")
    assert _api_messages(caplog) == []


def test_unhandled_error_returns_envelope(caplog):
    client = TestClient(_make_app())
    with caplog.at_level(logging.INFO, logger="api"):
        resp = client.get("/boom", headers={"X-Request-ID": "jam"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["ok"] is False
    assert body["request_id"] == "jam"
    assert body["error_id"]
    assert resp.headers["X-Request-ID"] == "jam"


def test_json_formatter_includes_print_fields():
    formatter = JsonFormatter()
    record = logging.LogRecord(
        "printing", logging.INFO, __file__, 1, "receipt printed", None, None
    )
    record.printer = "POS-58"
    record.order_id = 42
    data = json.loads(formatter.format(record))
    assert data["msg"] == "receipt printed"
    assert data["level"] == "INFO"
    assert data["printer"] == "POS-58"
    assert data["order_id"] == 42
    assert "dialect" not in data
