"""
Customers module (JSON API).

Scope:
- Customers CRUD with their full address set
- List with optional name/city/state/zip substring filters (one row per address)
"""
