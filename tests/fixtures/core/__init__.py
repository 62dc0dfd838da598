"""Core game fixtures."""

from tests.fixtures.core.nodes import create_small_tree
from tests.fixtures.core.sessions import (
    START_TIME,
    TEST_SESSION_ID,
    FailingStore,
    boot,
    create_scheduler,
    create_session,
    stock_intake,
)

__all__ = [
    "create_small_tree",
    "START_TIME",
    "TEST_SESSION_ID",
    "FailingStore",
    "boot",
    "create_scheduler",
    "create_session",
    "stock_intake",
]
