"""
Pytest fixtures for the farm kernel test suite.

Provides:
- Structured logging configured once per run, plus ``captured_logs``
- A database session per test (in-memory SQLite unless DATABASE_URL is set)
- A deterministic clock
- Factories for accounts, journal entries and role_permissions rows

Environment Variables:
- DATABASE_URL: SQLAlchemy URL of a scratch database. Defaults to
  ``sqlite://`` (in-memory). Tables are created once per run and every
  test's writes are rolled back.
"""

import json
import logging
import os
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from farm_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    init_engine_from_url,
    reset_engine,
)
from farm_kernel.domain.clock import DeterministicClock
from farm_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from farm_kernel.models.account import AccountType, ChartOfAccount
from farm_kernel.models.journal import JournalEntry, JournalEntryLine
from farm_kernel.models.role_permission import CustomRoleRecord, RolePermission

DEFAULT_DATABASE_URL = "sqlite://"


def get_database_url() -> str:
    """Get database URL from environment, or use in-memory SQLite."""
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture farm_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "route_access_denied" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("farm_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture(scope="session")
def db_engine():
    """Single engine for the whole test session, tables created once."""
    eng = init_engine_from_url(get_database_url(), echo=False)
    drop_tables()
    create_tables()
    yield eng
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    """
    Session bound to an outer transaction that is rolled back after the test.

    Tests may call ``session.flush()`` freely; nothing is committed.
    """
    connection = get_engine().connect()
    transaction = connection.begin()
    sess = Session(bind=connection)
    try:
        yield sess
    finally:
        sess.close()
        transaction.rollback()
        connection.close()


# =============================================================================
# Clock
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc))


# =============================================================================
# Data factories
# =============================================================================


@pytest.fixture
def create_account(session):
    """Factory: insert a chart_of_accounts row."""

    def _create(
        code: str,
        name: str,
        account_type: AccountType | str,
        is_active: bool = True,
        parent: ChartOfAccount | None = None,
    ) -> ChartOfAccount:
        acct = ChartOfAccount(
            account_code=code,
            account_name=name,
            account_type=AccountType.parse(account_type).value,
            is_active=is_active,
            parent_account_id=parent.id if parent is not None else None,
        )
        session.add(acct)
        session.flush()
        return acct

    return _create


@pytest.fixture
def post_entry(session):
    """
    Factory: insert a journal entry and its lines.

    ``lines`` is a sequence of ``(account, debit, credit)`` tuples.  Each
    entry gets a strictly increasing ``created_at`` so same-day entries
    replay in posting order on every backend.
    """
    counter = {"n": 0}
    base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _post(
        entry_date: date,
        lines: list[tuple[ChartOfAccount, str | Decimal, str | Decimal]],
        description: str = "Journal entry",
        reference: str | None = None,
    ) -> JournalEntry:
        counter["n"] += 1
        debits = sum((Decimal(str(d)) for _, d, _ in lines), Decimal("0"))
        credits = sum((Decimal(str(c)) for _, _, c in lines), Decimal("0"))
        entry = JournalEntry(
            entry_reference=reference or f"JE-{counter['n']:05d}",
            entry_date=entry_date,
            description=description,
            total_debit=debits,
            total_credit=credits,
            created_at=base_time + timedelta(seconds=counter["n"]),
        )
        for seq, (account, debit, credit) in enumerate(lines, start=1):
            entry.lines.append(
                JournalEntryLine(
                    account_id=account.id,
                    debit_amount=Decimal(str(debit)),
                    credit_amount=Decimal(str(credit)),
                    line_seq=seq,
                )
            )
        session.add(entry)
        session.flush()
        return entry

    return _post


@pytest.fixture
def grant_module(session):
    """Factory: insert a role_permissions override row."""

    def _grant(
        role_name: str,
        module_path: str,
        can_view: bool = True,
        role: CustomRoleRecord | None = None,
        **flags: bool,
    ) -> RolePermission:
        row = RolePermission(
            role_id=role.id if role is not None else None,
            role_name=role_name,
            module_path=module_path,
            can_view=can_view,
            **flags,
        )
        session.add(row)
        session.flush()
        return row

    return _grant
