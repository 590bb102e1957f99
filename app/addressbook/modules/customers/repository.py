from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, sessionmaker

from app.addressbook.db import session_scope
from app.addressbook.modules.customers.models import Address, Customer
from app.addressbook.modules.customers.service import AddressFields, CustomerFields

logger = logging.getLogger(__name__)

# customers.* followed by the joined address columns, keyed the way the API returns them.
LIST_COLUMNS = (
    Customer.id.label("id"),
    Customer.first_name.label("firstName"),
    Customer.last_name.label("lastName"),
    Customer.phone.label("phone"),
    Customer.email.label("email"),
    Address.street.label("street"),
    Address.city.label("city"),
    Address.state.label("state"),
    Address.zip.label("zip"),
)


@dataclass(frozen=True)
class CustomerFilters:
    name: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "CustomerFilters":
        return cls(
            name=args.get("name") or "",
            city=args.get("city") or "",
            state=args.get("state") or "",
            zip=args.get("zip") or "",
        )


def apply_filters(query: Query, filters: CustomerFilters) -> Query:
    """
    Add one substring predicate per non-empty filter. Values are bound parameters
    and LIKE wildcards inside them are escaped, so `50%` only matches a literal `50%`.
    """
    if filters.name:
        query = query.filter(
            or_(
                Customer.first_name.contains(filters.name, autoescape=True),
                Customer.last_name.contains(filters.name, autoescape=True),
            )
        )
    if filters.city:
        query = query.filter(Address.city.contains(filters.city, autoescape=True))
    if filters.state:
        query = query.filter(Address.state.contains(filters.state, autoescape=True))
    if filters.zip:
        query = query.filter(Address.zip.contains(filters.zip, autoescape=True))
    return query


def _address_row(customer_id: int, a: AddressFields) -> Address:
    return Address(
        customer_id=customer_id,
        street=a.street,
        city=a.city,
        state=a.state,
        zip=a.zip,
        is_primary=a.is_primary,
    )


class CustomerRepository:
    """
    Persistence for customers and their addresses.

    Every write runs in a single transaction (see `session_scope`): either all of
    its statements commit or none do.
    """

    def __init__(self, sm: sessionmaker[Session]) -> None:
        self._sm = sm

    def create_customer(self, customer: CustomerFields, addresses: Iterable[AddressFields]) -> int:
        with session_scope(self._sm) as s:
            c = Customer(
                first_name=customer.first_name,
                last_name=customer.last_name,
                phone=customer.phone,
                email=customer.email,
            )
            s.add(c)
            s.flush()
            customer_id = c.id
            s.add_all([_address_row(customer_id, a) for a in addresses])
            s.flush()
        logger.debug("Created customer id=%s", customer_id)
        return customer_id

    def list_customers(self, filters: CustomerFilters | None = None) -> list[dict[str, Any]]:
        """
        One row per (customer, address) pair; customers without addresses appear
        once with null address fields. No aggregation.
        """
        with session_scope(self._sm) as s:
            query = s.query(*LIST_COLUMNS).select_from(Customer).outerjoin(Address, Address.customer_id == Customer.id)
            query = apply_filters(query, filters or CustomerFilters())
            rows = query.order_by(Customer.id, Address.id).all()
            return [dict(r._mapping) for r in rows]

    def update_customer(self, customer_id: int, customer: CustomerFields, addresses: Iterable[AddressFields]) -> int:
        """
        Overwrite scalar fields and replace the whole address set.
        Returns the number of customer rows matched; 0 is not an error.
        """
        with session_scope(self._sm) as s:
            matched = (
                s.query(Customer)
                .filter(Customer.id == customer_id)
                .update(
                    {
                        Customer.first_name: customer.first_name,
                        Customer.last_name: customer.last_name,
                        Customer.phone: customer.phone,
                        Customer.email: customer.email,
                    },
                    synchronize_session=False,
                )
            )
            removed = s.query(Address).filter(Address.customer_id == customer_id).delete(synchronize_session=False)
            s.add_all([_address_row(customer_id, a) for a in addresses])
            s.flush()
        if not matched:
            logger.info("Update matched no customer (id=%s)", customer_id)
        logger.debug("Updated customer id=%s (replaced %s addresses)", customer_id, removed)
        return matched

    def delete_customer(self, customer_id: int) -> int:
        """Addresses first, then the customer row. Missing id is a no-op."""
        with session_scope(self._sm) as s:
            s.query(Address).filter(Address.customer_id == customer_id).delete(synchronize_session=False)
            deleted = s.query(Customer).filter(Customer.id == customer_id).delete(synchronize_session=False)
        logger.debug("Deleted customer id=%s (rows=%s)", customer_id, deleted)
        return deleted
