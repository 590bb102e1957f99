import pytest

from app.addressbook import create_app


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'test.db'}")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    app = create_app()
    return app.test_client()


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json["ok"] is True


def test_healthz_ok(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.get_data(as_text=True) == "ok"


def test_schema_created_on_startup(tmp_path, monkeypatch):
    from sqlalchemy import inspect

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'fresh.db'}")
    app = create_app()
    insp = inspect(app.extensions["sqlalchemy_engine"])
    assert insp.has_table("customers")
    assert insp.has_table("addresses")
    cols = {c["name"] for c in insp.get_columns("addresses")}
    assert {"customerId", "street", "city", "state", "zip", "isPrimary"} <= cols


def test_startup_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'twice.db'}")
    first = create_app().test_client()
    r = first.post(
        "/customers/",
        json={"firstName": "Jane", "lastName": "Doe", "phone": "1234567890", "email": "jane@x.com", "addresses": []},
    )
    assert r.status_code == 201

    # Second boot against the same file keeps existing rows.
    second = create_app().test_client()
    rows = second.get("/customers/").json
    assert [row["firstName"] for row in rows] == ["Jane"]


def test_startup_fails_when_database_cannot_be_opened(tmp_path, monkeypatch):
    from sqlalchemy.exc import OperationalError

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'missing-dir'/'x.db'}")
    with pytest.raises(OperationalError):
        create_app()


def test_cors_allows_any_origin(client):
    r = client.get("/customers/", headers={"Origin": "http://frontend.example"})
    assert r.status_code == 200
    assert r.headers.get("Access-Control-Allow-Origin") in ("*", "http://frontend.example")


def test_app_boots_with_invalid_port(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path/'port.db'}")
    monkeypatch.setenv("PORT", "not-a-port")
    client = create_app().test_client()
    assert client.get("/healthz").status_code == 200
