from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from app.addressbook.modules.customers.repository import CustomerFilters, CustomerRepository
from app.addressbook.modules.customers.service import (
    addresses_from_payload,
    customer_fields_from_payload,
    validate_customer_payload,
)

bp = Blueprint("customers", __name__)


def _repository() -> CustomerRepository:
    repo = current_app.extensions.get("customer_repository")
    if repo is None:
        raise RuntimeError("customer_repository not initialized")
    return repo


def _server_error(e: SQLAlchemyError, action: str):
    current_app.logger.error("%s failed (request_id=%s): %s", action, getattr(g, "request_id", None), e)
    return _text(f"Server error: {e}", 500)


def _text(message: str, status: int = 200):
    return message, status, {"Content-Type": "text/plain; charset=utf-8"}


def _json_payload() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@bp.post("/customers/")
def customers_create():
    payload = _json_payload()
    error = validate_customer_payload(payload)
    if error:
        return _text(error, 400)

    try:
        customer_id = _repository().create_customer(
            customer_fields_from_payload(payload),
            addresses_from_payload(payload),
        )
    except SQLAlchemyError as e:
        return _server_error(e, "Create customer")
    return jsonify({"id": customer_id}), 201


@bp.get("/customers/")
def customers_list():
    filters = CustomerFilters.from_args(request.args)
    try:
        rows = _repository().list_customers(filters)
    except SQLAlchemyError as e:
        return _server_error(e, "List customers")
    return jsonify(rows)


@bp.put("/customers/<int:customer_id>")
@bp.put("/customers/<int:customer_id>/")
def customers_update(customer_id: int):
    payload = _json_payload()
    error = validate_customer_payload(payload)
    if error:
        return _text(error, 400)

    try:
        _repository().update_customer(
            customer_id,
            customer_fields_from_payload(payload),
            addresses_from_payload(payload),
        )
    except SQLAlchemyError as e:
        return _server_error(e, "Update customer")
    return _text("Customer updated successfully")


@bp.delete("/customers/<int:customer_id>")
@bp.delete("/customers/<int:customer_id>/")
def customers_delete(customer_id: int):
    try:
        _repository().delete_customer(customer_id)
    except SQLAlchemyError as e:
        return _server_error(e, "Delete customer")
    return _text("Customer deleted successfully")
