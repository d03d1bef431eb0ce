"""Unit tests for QueryBuilder behaviour against a recording connection."""

from __future__ import annotations

from dataclasses import dataclass
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from aureldb.errors import PaginationError, QueryBuildError
from aureldb.query.builder import QueryBuilder
from tests.fixtures import RecordingConnection


class UserModel(BaseModel):
    id: int
    name: str


@dataclass
class UserRow:
    id: int
    name: str


def _users(conn: RecordingConnection) -> QueryBuilder:
    return conn.table("users")


def test_where_params_merge_and_overwrite():
    conn = RecordingConnection()
    b = _users(conn).where("a = :x", {"x": 1}).where("b = :y", {"y": 2})
    b.or_where("c = :x", {"x": 3})
    assert b.get_bindings() == {"x": 3, "y": 2}


def test_get_bindings_is_a_copy():
    b = _users(RecordingConnection()).where("a = :x", {"x": 1})
    b.get_bindings()["x"] = 99
    assert b.get_bindings() == {"x": 1}


def test_update_attributes_overwrite_where_params():
    conn = RecordingConnection()
    _users(conn).where("name = :name", {"name": "old"}).update({"name": "new"})
    _, sql, params = conn.last_statement
    assert sql == "update users set name = :name where name = :name"
    assert params == {"name": "new"}


def test_first_uses_same_sql_and_params_as_get():
    conn = RecordingConnection(rows=[{"id": 1, "name": "ada"}])
    b = _users(conn).where("id = :id", {"id": 1}).order_by("id")
    b.get()
    b.first()
    (kind_all, sql_all, params_all), (kind_one, sql_one, params_one) = conn.statements
    assert (kind_all, kind_one) == ("select", "select_one")
    assert sql_all == sql_one
    assert params_all == params_one


def test_first_returns_none_without_rows():
    assert _users(RecordingConnection()).first() is None


def test_get_maps_rows_to_dict_by_default():
    conn = RecordingConnection(rows=[{"id": 1, "name": "ada"}])
    assert _users(conn).get() == [{"id": 1, "name": "ada"}]


@pytest.mark.parametrize("shape", [UserModel, UserRow, SimpleNamespace])
def test_as_instances_of_maps_rows(shape):
    conn = RecordingConnection(rows=[{"id": 1, "name": "ada"}])
    (row,) = _users(conn).as_instances_of(shape).get()
    assert isinstance(row, shape)
    assert row.id == 1
    assert row.name == "ada"


def test_count_without_group_by_returns_scalar():
    conn = RecordingConnection(rows=[{"count": 7}])
    b = _users(conn).select("id", "name").where("age > :age", {"age": 1})
    assert b.count() == 7
    _, sql, params = conn.last_statement
    assert sql == "select count(*) count from users where age > :age"
    assert params == {"age": 1}


def test_count_with_group_by_returns_number_of_groups():
    conn = RecordingConnection(rows=[{"count": 2}, {"count": 3}, {"count": 9}])
    assert _users(conn).group_by("team_id").count() == 3


def test_count_ignores_row_shape_and_keeps_projection():
    conn = RecordingConnection(rows=[{"count": 4}])
    b = _users(conn).select("id").as_instances_of(UserModel)
    assert b.count() == 4
    assert b.to_sql() == "select id from users"


def test_clone_for_count_resets_projection_order_and_paging():
    conn = RecordingConnection()
    b = (
        _users(conn)
        .select("id")
        .inner_join("teams on teams.id = users.team_id")
        .where("age > :age", {"age": 18})
        .group_by("team_id")
        .order_by("name")
        .limit(5)
        .offset(10)
    )
    clone = b.clone_for_count()
    assert clone.to_sql() == (
        "select * from users inner join teams on teams.id = users.team_id"
        " where age > :age group by team_id"
    )
    assert clone.get_bindings() == {"age": 18}
    assert clone.connection is conn


def test_clone_for_count_is_independent():
    conn = RecordingConnection()
    b = _users(conn).where("age > :age", {"age": 18})
    before = b.to_sql()
    clone = b.clone_for_count()
    clone.where("name = :name", {"name": "x"}).inner_join("teams on 1 = 1")
    assert b.to_sql() == before
    assert b.get_bindings() == {"age": 18}


def test_paginate_sets_limit_offset_and_counts_with_clone():
    conn = RecordingConnection(rows=[{"count": 5}])
    b = _users(conn).select("id").order_by("id")
    page = b.paginate(per_page=2, page=2)
    (_, items_sql, _), (_, count_sql, _) = conn.statements
    assert items_sql == "select id from users order by id asc limit 2 offset 2"
    assert count_sql == "select count(*) count from users"
    assert page.total == 5
    assert page.current_page == 2
    assert page.per_page == 2
    assert page.page_name == "page"


def test_paginate_first_page_has_no_offset():
    conn = RecordingConnection(rows=[{"count": 1}])
    _users(conn).paginate(per_page=10)
    assert conn.statements[0][1] == "select * from users limit 10"


@pytest.mark.parametrize("page", [None, "abc", "", 0, -3, "0"])
def test_paginate_falls_back_to_first_page(page):
    conn = RecordingConnection(rows=[{"count": 0}])
    result = _users(conn).paginate(per_page=3, page=page, page_name="p")
    assert result.current_page == 1
    assert result.page_name == "p"


def test_paginate_accepts_numeric_string():
    conn = RecordingConnection(rows=[{"count": 30}])
    assert _users(conn).paginate(per_page=10, page="3").current_page == 3


def test_paginate_accepts_integral_float_page():
    conn = RecordingConnection(rows=[{"count": 5}])
    result = _users(conn).paginate(per_page=2, page=2.0)
    assert result.current_page == 2
    assert conn.statements[0][1] == "select * from users limit 2 offset 2"


@pytest.mark.parametrize("per_page", [0, -1])
def test_paginate_rejects_non_positive_per_page(per_page):
    conn = RecordingConnection()
    with pytest.raises(PaginationError):
        _users(conn).paginate(per_page=per_page)
    assert conn.statements == []


def test_insert_get_id_returns_driver_id():
    conn = RecordingConnection(last_id=42)
    assert _users(conn).insert_get_id({"name": "a"}) == 42
    assert conn.last_insert_id() == 42


def test_insert_get_id_returns_zero_without_generated_id(caplog):
    conn = RecordingConnection(last_id=0)
    with caplog.at_level("WARNING", logger="aureldb.query.builder"):
        assert conn.table("tags").insert_get_id({"code": "x"}) == 0
    assert "produced no generated id" in caplog.text


def test_unknown_where_boolean_raises():
    with pytest.raises(QueryBuildError) as exc:
        _users(RecordingConnection()).where("a = 1", boolean="xor")
    assert exc.value.clause == "where"


def test_unknown_join_type_raises():
    with pytest.raises(QueryBuildError) as exc:
        _users(RecordingConnection()).join("t on 1 = 1", "full")
    assert exc.value.clause == "join"


def test_connection_query_returns_fresh_builders():
    conn = RecordingConnection()
    a = conn.table("users").where("id = 1")
    b = conn.table("users")
    assert a is not b
    assert b.to_sql() == "select * from users"


@pytest.mark.parametrize(
    "name",
    [n for n in vars(QueryBuilder) if not n.startswith("_")],
)
def test_public_builder_methods_are_documented(name):
    assert getattr(QueryBuilder, name).__doc__
