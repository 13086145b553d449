"""Tests for PreparedQueryAs cardinality and decoding."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pytest

from sqlbind import (
    BinderError,
    EngineError,
    MultipleResultsFoundError,
    NotFoundError,
    PreparedQueryAs,
    Query,
    QueryAs,
    RowDecodeError,
)


@dataclass
class User:
    id: int
    name: str


class Account:
    def __init__(self, ident: int, balance: int) -> None:
        self.ident = ident
        self.balance = balance

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Account:
        return cls(ident=row["id"], balance=row["balance"])


ALICE = {"id": 1, "name": "alice"}
BOB = {"id": 2, "name": "bob"}
CAROL = {"id": 3, "name": "carol"}


def _users_query(binder: Any = None) -> PreparedQueryAs[User]:
    return PreparedQueryAs(
        "SELECT id, name FROM users WHERE name LIKE :pattern",
        binder or (lambda q, key: q.bind("%")),
        schema_type=User,
    )


@pytest.mark.asyncio
async def test_fetch_all_decodes_rows_in_engine_order(make_executor: Any) -> None:
    executor = make_executor(rows=[BOB, ALICE])
    users = await _users_query().fetch_all(executor)

    assert users == [User(2, "bob"), User(1, "alice")]
    assert executor.calls == [("fetch", "SELECT id, name FROM users WHERE name LIKE ?", ("%",), None)]


@pytest.mark.asyncio
async def test_fetch_all_empty(make_executor: Any) -> None:
    assert await _users_query().fetch_all(make_executor(rows=[])) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("rows", "expected"),
    [
        pytest.param([], NotFoundError, id="no-rows"),
        pytest.param([ALICE], User(1, "alice"), id="one-row"),
        pytest.param([ALICE, BOB], MultipleResultsFoundError, id="two-rows"),
        pytest.param([ALICE, BOB, CAROL], MultipleResultsFoundError, id="three-rows"),
    ],
)
async def test_fetch_one_cardinality(make_executor: Any, rows: list[dict[str, Any]], expected: Any) -> None:
    executor = make_executor(rows=rows)
    query = _users_query()

    if isinstance(expected, type):
        with pytest.raises(expected) as exc_info:
            await query.fetch_one(executor)
        assert isinstance(exc_info.value, EngineError)
    else:
        assert await query.fetch_one(executor) == expected
    assert executor.calls[0][3] == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("rows", "expected"),
    [
        pytest.param([], None, id="no-rows"),
        pytest.param([ALICE], User(1, "alice"), id="one-row"),
        pytest.param([ALICE, BOB], MultipleResultsFoundError, id="two-rows"),
        pytest.param([ALICE, BOB, CAROL], MultipleResultsFoundError, id="three-rows"),
    ],
)
async def test_fetch_optional_cardinality(make_executor: Any, rows: list[dict[str, Any]], expected: Any) -> None:
    executor = make_executor(rows=rows)
    query = _users_query()

    if isinstance(expected, type):
        with pytest.raises(expected):
            await query.fetch_optional(executor)
    else:
        assert await query.fetch_optional(executor) == expected


@pytest.mark.asyncio
async def test_too_many_rows_error_is_shared(make_executor: Any) -> None:
    executor = make_executor(rows=[ALICE, BOB])
    query = _users_query()

    with pytest.raises(MultipleResultsFoundError) as one_exc:
        await query.fetch_one(executor)
    with pytest.raises(MultipleResultsFoundError) as optional_exc:
        await query.fetch_optional(executor)

    assert str(one_exc.value) == str(optional_exc.value) == "too many rows"


@pytest.mark.asyncio
async def test_no_rows_message(make_executor: Any) -> None:
    with pytest.raises(NotFoundError, match="no rows"):
        await _users_query().fetch_one(make_executor(rows=[]))


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["fetch_all", "fetch_one", "fetch_optional"])
async def test_binder_replay_count_per_fetch(make_executor: Any, make_binder: Any, operation: str) -> None:
    binder = make_binder({":lo": 1, ":hi": 9})
    query: PreparedQueryAs[User] = PreparedQueryAs(
        "SELECT id, name FROM users WHERE id BETWEEN :lo AND :hi OR id = :lo", binder, schema_type=User
    )

    await getattr(query, operation)(make_executor(rows=[ALICE]))

    assert binder.calls == [":lo", ":hi", ":lo"]


@pytest.mark.asyncio
async def test_rows_without_schema_type_are_dicts(make_executor: Any) -> None:
    query: PreparedQueryAs[dict[str, Any]] = PreparedQueryAs("SELECT id, name FROM users", lambda q, key: q)
    rows = await query.fetch_all(make_executor(rows=[ALICE]))

    assert rows == [ALICE]
    assert rows[0] is not ALICE
    assert query.schema_type is None


@pytest.mark.asyncio
async def test_from_row_type(make_executor: Any) -> None:
    query = PreparedQueryAs(
        "SELECT id, balance FROM accounts WHERE id = :id", lambda q, key: q.bind(7), schema_type=Account
    )
    account = await query.fetch_one(make_executor(rows=[{"id": 7, "balance": 100}]))

    assert isinstance(account, Account)
    assert (account.ident, account.balance) == (7, 100)


@pytest.mark.asyncio
async def test_tuple_rows(make_executor: Any) -> None:
    query = PreparedQueryAs("SELECT balance FROM accounts WHERE id = :id", lambda q, key: q.bind(1), schema_type=tuple)
    assert await query.fetch_one(make_executor(rows=[{"balance": 250}])) == (250,)


@pytest.mark.asyncio
async def test_decode_failure_is_an_engine_error(make_executor: Any) -> None:
    executor = make_executor(rows=[{"id": 1}])

    with pytest.raises(RowDecodeError, match="User") as exc_info:
        await _users_query().fetch_one(executor)

    assert isinstance(exc_info.value, EngineError)
    assert isinstance(exc_info.value.__cause__, TypeError)


@pytest.mark.asyncio
async def test_fetch_engine_errors_are_wrapped(make_executor: Any) -> None:
    executor = make_executor(error=OSError("server has gone away"))

    with pytest.raises(EngineError, match="Engine fetch failed"):
        await _users_query().fetch_all(executor)


@pytest.mark.asyncio
async def test_builder_type(make_executor: Any) -> None:
    seen: list[Any] = []

    def binder(query: QueryAs[User], name: str) -> QueryAs[User]:
        seen.append(query)
        return query.bind(name)

    await _users_query(binder).fetch_all(make_executor(rows=[]))

    assert isinstance(seen[0], QueryAs)
    assert seen[0].schema_type is User


@pytest.mark.asyncio
async def test_binder_returning_plain_query_is_rejected(make_executor: Any) -> None:
    executor = make_executor(rows=[ALICE])
    query = _users_query(lambda q, key: Query(q.sql).bind("%"))

    with pytest.raises(BinderError, match="expected QueryAs"):
        await query.fetch_one(executor)

    assert executor.calls == []
