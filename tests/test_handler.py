"""
Tests for the Lambda entry points and the health handler.
Drives the Mangum handlers with API Gateway (REST, v1) events.
"""
import importlib
import json
import sys
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from productos_api.config import ConfigurationError
from productos_api.main import create_app, create_hello_app
from tests.conftest import FakeStore

ENV_VARS = ("PRODUCTOS_STORE", "SUPABASE_URL", "SUPABASE_KEY", "DATABASE_URL", "PRODUCTOS_TABLE", "LOG_LEVEL")


def api_gateway_event(method, path, body=None, query=None):
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {"host": "api.example.com", "content-type": "application/json"},
        "multiValueHeaders": {},
        "queryStringParameters": query,
        "multiValueQueryStringParameters": {k: [v] for k, v in query.items()} if query else None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "resourcePath": path,
            "httpMethod": method,
            "path": path,
            "stage": "prod",
            "requestId": "test-request",
            "identity": {"sourceIp": "127.0.0.1"},
        },
        "body": json.dumps(body) if body is not None else None,
        "isBase64Encoded": False,
    }


def load_module(name):
    sys.modules.pop(name, None)
    return importlib.import_module(name)


@pytest.fixture
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestProductosFunction:

    def test_round_trip_through_lambda_with_sql_store(self, clean_env, tmp_path):
        clean_env.setenv("PRODUCTOS_STORE", "sql")
        clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'productos.db'}")
        handler = load_module("handler").handler
        context = SimpleNamespace()

        created = handler(api_gateway_event("POST", "/api/productos", {"nombre": "Lápiz", "precio": 1.25}), context)
        assert created["statusCode"] == 201
        (producto,) = json.loads(created["body"])
        assert producto["nombre"] == "Lápiz"
        assert producto["precio"] == 1.25

        listed = handler(api_gateway_event("GET", "/api/productos"), context)
        assert listed["statusCode"] == 200
        assert json.loads(listed["body"]) == [producto]

        deleted = handler(api_gateway_event("DELETE", "/api/productos", query={"id": str(producto["id"])}), context)
        assert deleted["statusCode"] == 200
        assert json.loads(deleted["body"]) == [producto]

    def test_missing_configuration_fails_at_import(self, clean_env):
        with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
            load_module("handler")


class TestHelloFunction:

    def test_hello_needs_no_configuration(self, clean_env):
        handler = load_module("hello_handler").handler
        response = handler(api_gateway_event("POST", "/api/hello", {"any": "thing"}), SimpleNamespace())
        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"message": "Hello from Productos API!", "method": "POST"}

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "TRACE", "OPTIONS"])
    def test_hello_echoes_method(self, method):
        client = TestClient(create_hello_app())
        response = client.request(method, "/api/hello")
        assert response.status_code == 200
        assert response.json()["method"] == method

    def test_hello_is_mounted_on_productos_app(self, settings):
        store = FakeStore()
        client = TestClient(create_app(settings=settings, store=store))
        response = client.get("/api/hello")
        assert response.status_code == 200
        assert response.json() == {"message": "Hello from Productos API!", "method": "GET"}
        assert store.calls == []
