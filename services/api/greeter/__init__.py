"""Greeter API: greeting from PostgreSQL, visit counter in Redis."""
