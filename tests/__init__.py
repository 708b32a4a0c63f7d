#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    uv run python -m pytest tests/ -v

    # Using unittest
    uv run python -m unittest discover tests -v

No external services are required: the metadata source is mocked and the
auth tests use an in-memory SQLite database.
"""

import os

# Keep the engine created at import time away from the project directory
os.environ.setdefault("DATABASE_URL", "sqlite://")
