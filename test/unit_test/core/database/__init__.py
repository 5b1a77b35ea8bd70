"""Unit tests for the bibliafs database layer.

Repository tests run against the per-test in-memory SQLite database from
``test/unit_test/conftest.py``.
"""
