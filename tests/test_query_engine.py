"""Tests for sort-key parsing, ordering and pagination."""

import pytest

from userdirectory.engine.pagination import paginate, normalize_page, normalize_per_page
from userdirectory.engine.sorting import SortSpec, parse_sort_spec, sort_users
from userdirectory.errors import ValidationError
from userdirectory.models.user import User


def _user(user_id, name, age, email=None):
    return User(id=user_id, name=name, email=email or f"{user_id}@example.com", age=age, password_hash="x")


class TestParseSortSpec:

    @pytest.mark.parametrize("raw,expected", [
        ("name", SortSpec("name", False)),
        ("-name", SortSpec("name", True)),
        ("age", SortSpec("age", False)),
        ("-age", SortSpec("age", True)),
        ("email", SortSpec("email", False)),
        ("-id", SortSpec("id", True)),
    ])
    def test_valid_keys(self, raw, expected):
        assert parse_sort_spec(raw) == expected

    @pytest.mark.parametrize("raw", ["", "-", "password_hash", "Name", "name; DROP TABLE users", "--name"])
    def test_rejects_unsupported_keys(self, raw):
        with pytest.raises(ValidationError):
            parse_sort_spec(raw)


class TestSortUsers:

    def test_ascending_and_descending_by_age(self):
        users = [_user("b", "B", 30), _user("a", "A", 20), _user("c", "C", 40)]

        assert [u.age for u in sort_users(users, SortSpec("age"))] == [20, 30, 40]
        assert [u.age for u in sort_users(users, SortSpec("age", descending=True))] == [40, 30, 20]

    def test_ties_broken_by_id_ascending_in_both_directions(self):
        users = [_user("c", "Same", 30), _user("a", "Same", 30), _user("b", "Same", 30)]

        assert [u.id for u in sort_users(users, SortSpec("name"))] == ["a", "b", "c"]
        assert [u.id for u in sort_users(users, SortSpec("name", descending=True))] == ["a", "b", "c"]


class TestPaginate:

    def test_middle_page_metadata(self):
        result = paginate(list(range(1, 26)), page=2, per_page=10)

        assert result.data == list(range(11, 21))
        assert result.first_page == 1
        assert result.prev_page == 1
        assert result.next_page == 3
        assert result.last_page == 3
        assert result.total_pages == 3
        assert result.total_items == 25

    def test_first_and_last_page_edges(self):
        first = paginate(list(range(25)), page=1, per_page=10)
        last = paginate(list(range(25)), page=3, per_page=10)

        assert first.prev_page is None
        assert first.next_page == 2
        assert last.prev_page == 2
        assert last.next_page is None
        assert len(last.data) == 5

    def test_page_past_end_is_empty(self):
        result = paginate(list(range(5)), page=4, per_page=10)
        assert result.data == []
        assert result.prev_page == 3
        assert result.next_page is None
        assert result.total_pages == 1

    def test_empty_input(self):
        result = paginate([], page=1, per_page=10)
        assert result.data == []
        assert result.total_items == 0
        assert result.total_pages == 0
        assert result.last_page == 0
        assert result.prev_page is None
        assert result.next_page is None

    def test_non_positive_inputs_are_clamped(self):
        assert normalize_page(0) == 1
        assert normalize_page(-3) == 1
        assert normalize_per_page(0) == 10
        assert normalize_per_page(-1) == 10

        result = paginate(list(range(15)), page=0, per_page=0)
        assert result.data == list(range(10))
        assert result.prev_page is None

    def test_serializes_with_short_keys(self):
        dumped = paginate([1, 2, 3], page=1, per_page=2).model_dump(by_alias=True)
        assert dumped == {
            "data": [1, 2],
            "first": 1,
            "prev": None,
            "next": 2,
            "last": 2,
            "pages": 2,
            "items": 3,
        }
