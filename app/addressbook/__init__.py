import logging
import uuid

from flask import Flask, g
from flask_cors import CORS
from dotenv import load_dotenv

from app.addressbook.config import load_config
from app.addressbook.db import ensure_schema, init_db
from app.addressbook.modules.customers.api import bp as customers_bp
from app.addressbook.modules.customers.repository import CustomerRepository
from app.addressbook.routes import bp as routes_bp


def create_app(repository: CustomerRepository | None = None) -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    app.logger.setLevel(app.config["LOG_LEVEL"])
    # List rows keep the column order of the SELECT.
    app.json.sort_keys = False  # type: ignore[attr-defined]

    app.logger.info("Initializing database and server...")
    init_db(app)

    # Startup failure is fatal: log and let the process exit.
    try:
        app.logger.info("Creating tables...")
        ensure_schema(app.extensions["sqlalchemy_engine"])
    except Exception as e:
        app.logger.error("DB Error: %s", e)
        raise

    if repository is None:
        repository = CustomerRepository(app.extensions["sqlalchemy_sessionmaker"])
    app.extensions["customer_repository"] = repository
    app.logger.info("Database initialized.")

    CORS(app, origins=app.config["CORS_ORIGINS"])

    @app.before_request
    def _assign_request_id():
        if not getattr(g, "request_id", None):
            g.request_id = uuid.uuid4().hex

    app.register_blueprint(routes_bp)
    app.register_blueprint(customers_bp)

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        original = getattr(e, "original_exception", None) or e
        app.logger.error("Unhandled 500 (request_id=%s)", getattr(g, "request_id", None), exc_info=original)
        return f"Server error: {original}", 500, {"Content-Type": "text/plain; charset=utf-8"}

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
