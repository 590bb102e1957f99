"""
Feature modules live under this package.

Each module owns its models, persistence and routes, and reuses the platform
primitives (config, DB engine/session scope).
"""
