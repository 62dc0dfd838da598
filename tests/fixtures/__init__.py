"""Test fixtures for the Soul Bridge terminal.

- core: trees, schedulers, stores and sessions
- api: FastAPI TestClient wired to a test session
"""
