"""
db/guard.py
-----------
Fail-fast tenant guard for ORM statements.

TenantGuardedSession is the sync session class behind every AsyncSession
the application hands out. Its do_orm_execute hook inspects each ORM
SELECT / UPDATE / DELETE: every table the statement touches that carries a
tenant_id column (every TenantScopedMixin table) must be constrained by a
``tenant_id = ...`` term ANDed into the WHERE clause. Tables are collected
from the whole statement, so aggregates over select_from() are covered; an
equality nested under OR or NOT does not count. Anything else is rejected
with UnscopedQueryError before any SQL is sent.

Refreshes of already-loaded rows (Session.refresh, expired attributes)
and relationship lazy-loads are exempt: the row was reached through a
scoped query in the first place.
"""

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session
from sqlalchemy.sql import operators
from sqlalchemy.sql.elements import BinaryExpression, BooleanClauseList, Grouping
from sqlalchemy.sql.util import find_tables

from backoffice.core.exceptions import UnscopedQueryError
from backoffice.core.logging import get_logger

logger = get_logger(__name__)

TENANT_COLUMN = "tenant_id"


class TenantGuardedSession(Session):
    """Session subclass carrying the tenant guard listener."""


def _is_tenant_column(element, table_name: str) -> bool:
    table = getattr(element, "table", None)
    return (
        getattr(element, "key", None) == TENANT_COLUMN
        and getattr(table, "name", None) == table_name
    )


def _conjuncts(clause):
    """Top-level AND terms of a WHERE clause; OR / NOT are not entered."""
    if isinstance(clause, Grouping):
        yield from _conjuncts(clause.element)
    elif isinstance(clause, BooleanClauseList) and clause.operator is operators.and_:
        for term in clause.clauses:
            yield from _conjuncts(term)
    else:
        yield clause


def has_tenant_clause(whereclause, table_name: str) -> bool:
    """True if ``<table>.tenant_id = <value>`` is one of the clause's AND terms."""
    if whereclause is None:
        return False
    for term in _conjuncts(whereclause):
        if not isinstance(term, BinaryExpression) or term.operator is not operators.eq:
            continue
        if _is_tenant_column(term.left, table_name) or _is_tenant_column(
            term.right, table_name
        ):
            return True
    return False


def scoped_tables(statement) -> list[str]:
    """Names of tenant-scoped tables the statement reads or writes, in order."""
    names = []
    for table in find_tables(statement, check_columns=True, include_crud=True):
        columns = getattr(table, "c", None)
        if columns is None or TENANT_COLUMN not in columns:
            continue
        if table.name not in names:
            names.append(table.name)
    return names


@event.listens_for(TenantGuardedSession, "do_orm_execute")
def _reject_unscoped_statements(state: ORMExecuteState) -> None:
    if not (state.is_select or state.is_update or state.is_delete):
        return
    if state.is_column_load or state.is_relationship_load:
        return

    whereclause = getattr(state.statement, "whereclause", None)
    for table_name in scoped_tables(state.statement):
        if not has_tenant_clause(whereclause, table_name):
            logger.error("Unscoped query rejected", table=table_name)
            raise UnscopedQueryError(
                f"Query on '{table_name}' has no tenant_id constraint"
            )
