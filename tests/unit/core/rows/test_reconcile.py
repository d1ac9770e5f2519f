"""Unit tests for cell-to-row reconciliation."""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta

from sheetshare.core.rows import (
    ADMIN_USERNAME,
    UNKNOWN_USERNAME,
    attach_usernames,
    group_cells,
    owner_ids,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@dataclass
class FakeCell:
    id: int
    field_id: int
    row_key: str
    owner_user_id: int | None
    value: str | None = "v"
    created_at: datetime = BASE_TIME


def _cell(cell_id: int, row_key: str, owner: int | None, field_id: int = 1, value: str | None = "v") -> FakeCell:
    return FakeCell(
        id=cell_id,
        field_id=field_id,
        row_key=row_key,
        owner_user_id=owner,
        value=value,
        created_at=BASE_TIME + timedelta(seconds=cell_id),
    )


class TestGroupCells:
    def test_empty(self) -> None:
        assert group_cells([]) == []

    def test_one_row_per_identity(self) -> None:
        cells = [
            _cell(1, "a", None, field_id=1),
            _cell(2, "a", None, field_id=2),
            _cell(3, "a", 7, field_id=1),
            _cell(4, "b", 7, field_id=1),
        ]
        rows = group_cells(cells)

        identities = [row.identity for row in rows]
        assert len(identities) == len(set(identities)) == 3
        assert {("a", None), ("a", 7), ("b", 7)} == set(identities)

    def test_same_row_key_different_owners_stay_separate(self) -> None:
        rows = group_cells([_cell(1, "shared", 3), _cell(2, "shared", 4)])
        assert [(r.row_key, r.owner_user_id) for r in rows] == [("shared", 3), ("shared", 4)]

    def test_min_cell_id_is_lowest_id_in_row(self) -> None:
        cells = [_cell(9, "a", 5, field_id=1), _cell(4, "a", 5, field_id=2), _cell(6, "a", 5, field_id=3)]
        (row,) = group_cells(cells)
        assert row.min_cell_id == 4
        assert row.created_at == BASE_TIME + timedelta(seconds=4)

    def test_display_order(self) -> None:
        cells = [
            _cell(3, "r5b", 5),
            _cell(7, "r2", 2),
            _cell(10, "admin", None),
            _cell(1, "r5a", 5),
        ]
        rows = group_cells(cells)
        assert [(r.owner_user_id, r.min_cell_id) for r in rows] == [(None, 10), (2, 7), (5, 1), (5, 3)]

    def test_order_is_independent_of_input_order(self) -> None:
        cells = [_cell(i, f"row-{i % 4}", (i % 3) or None, field_id=i) for i in range(1, 25)]
        expected = [r.identity for r in group_cells(cells)]

        rng = random.Random(42)
        for _ in range(5):
            shuffled = cells[:]
            rng.shuffle(shuffled)
            assert [r.identity for r in group_cells(shuffled)] == expected

    def test_missing_values_read_as_empty(self) -> None:
        (row,) = group_cells([_cell(1, "a", None, field_id=1, value=None)])
        assert row.cells[1].value == ""
        assert row.cells[1].id == 1
        assert row.value_of(99) == ""


class TestUsernames:
    def test_attach_usernames(self) -> None:
        rows = group_cells([_cell(1, "a", None), _cell(2, "b", 7), _cell(3, "c", 8)])
        attach_usernames(rows, {7: "alice"})

        assert [r.username for r in rows] == [ADMIN_USERNAME, "alice", UNKNOWN_USERNAME]

    def test_owner_ids_skips_admin(self) -> None:
        rows = group_cells([_cell(1, "a", None), _cell(2, "b", 7), _cell(3, "c", 7)])
        assert owner_ids(rows) == {7}
