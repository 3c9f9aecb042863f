"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared schema and document fixtures
- Isolation of isonantic environment variables between tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from isonantic import DocumentSchema

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Pytest Hooks
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_isonantic_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep .env settings from leaking into schema behavior under test."""
    monkeypatch.delenv("ISONANTIC_STRICT_PATTERNS", raising=False)


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def team_document_schema() -> DocumentSchema:
    """Create a document schema with a record block and a row table.

    Returns:
        A DocumentSchema with `meta` (object) and `users` (table rows) blocks.
    """
    from isonantic import I

    return I.Document(
        {
            "meta": I.Object(
                {
                    "title": I.String().min(1),
                    "version": I.Int().positive().default(1),
                }
            ),
            "users": I.Table(
                "users",
                {
                    "id": I.Int().positive(),
                    "name": I.String().min(2).max(40),
                    "email": I.String().email(),
                    "active": I.Bool().default(True),
                    "team": I.Ref().namespace("team").optional(),
                },
            ).rows(min_rows=1),
        }
    )


@pytest.fixture
def valid_team_document() -> dict[str, Any]:
    """A document that satisfies `team_document_schema`."""
    return {
        "meta": {"title": "Platform"},
        "users": [
            {"id": 1, "name": "Ann", "email": "ann@example.com", "team": ":team:7"},
            {"id": 2, "name": "Bob", "email": "bob@example.com", "active": False},
        ],
    }
