"""Unit tests for booking statement composition."""

import pytest

from bookings import queries
from bookings.schemas import BookingCreate, BookingFilter, BookingUpdate

COLUMNS = 'id, startdate AS "start", enddate AS "end", description'
JOINED_COLUMNS = 'b.id, b.startdate AS "start", b.enddate AS "end", b.description'
RETURNING = f" RETURNING {COLUMNS}"
JOIN = (
    " b INNER JOIN tagassignment ta ON b.id = ta.booking_id"
    " INNER JOIN tag t ON t.id = ta.tag_id"
)


def test_no_filters_selects_whole_table_without_join():
    statement = queries.compose_select(BookingFilter())

    assert statement.sql == f"SELECT {COLUMNS} FROM booking WHERE TRUE"
    assert statement.args == ()


def test_every_filter_is_conjoined_in_fixed_order():
    statement = queries.compose_select(
        BookingFilter(
            id=1,
            start_min=10,
            start_max=20,
            end_min=30,
            end_max=40,
            tags=["work", "meeting"],
            description_contains="stand",
        )
    )

    assert statement.sql == (
        f"SELECT DISTINCT {JOINED_COLUMNS} FROM booking{JOIN}"
        " WHERE TRUE"
        " AND b.id = $1"
        " AND startdate > $2"
        " AND startdate < $3"
        " AND enddate > $4"
        " AND enddate < $5"
        " AND description LIKE $6"
        " AND t.name IN ($7,$8)"
    )
    assert statement.args == (1, 10, 20, 30, 40, "%stand%", "work", "meeting")


def test_id_is_unqualified_without_join():
    statement = queries.compose_select(BookingFilter(id=5))

    assert statement.sql == f"SELECT {COLUMNS} FROM booking WHERE TRUE AND id = $1"
    assert statement.args == (5,)


def test_single_later_filter_still_uses_and_prefix():
    statement = queries.compose_select(BookingFilter(end_min=100))
    assert statement.sql.endswith(" WHERE TRUE AND enddate > $1")


def test_end_max_is_an_upper_bound():
    # end_max could be read as a second lower bound (`enddate > end_max`,
    # mirroring end_min) or as the upper bound its name promises. The upper
    # bound is the chosen behavior; a `>` here would make end_max a duplicate
    # of end_min.
    statement = queries.compose_select(BookingFilter(end_max=40))

    assert statement.sql.endswith(" AND enddate < $1")
    assert "enddate >" not in statement.sql


@pytest.mark.parametrize("tags", [["a"], ["a", "b", "c", "d"]])
def test_tag_filter_binds_one_parameter_per_name(tags):
    statement = queries.compose_select(BookingFilter(tags=tags))

    placeholders = ",".join(f"${i}" for i in range(1, len(tags) + 1))
    assert JOIN in statement.sql
    assert statement.sql.endswith(f" AND t.name IN ({placeholders})")
    assert statement.args == tuple(tags)


def test_empty_tag_list_is_treated_as_absent():
    statement = queries.compose_select(BookingFilter(tags=[]))

    assert statement == queries.compose_select(BookingFilter())
    assert "JOIN" not in statement.sql
    assert "IN (" not in statement.sql


def test_description_filter_is_bound_not_interpolated():
    hostile = "x' OR '1'='1"
    statement = queries.compose_select(BookingFilter(description_contains=hostile))

    assert hostile not in statement.sql
    assert statement.args == (f"%{hostile}%",)


def test_composition_is_deterministic():
    filters = BookingFilter(id=2, tags=["x"], description_contains="y")
    assert queries.compose_select(filters) == queries.compose_select(filters)


def test_insert_defaults_start_to_now():
    statement = queries.compose_insert(BookingCreate(description="standup"), now_ms=1_700_000_000_000)

    assert statement.sql == f"INSERT INTO booking (startdate, description) VALUES ($1, $2){RETURNING}"
    assert statement.args == (1_700_000_000_000, "standup")


def test_insert_uses_wall_clock_when_no_start_given():
    before = queries.now_epoch_ms()
    statement = queries.compose_insert(BookingCreate())
    after = queries.now_epoch_ms()

    assert statement.sql == f"INSERT INTO booking (startdate) VALUES ($1){RETURNING}"
    assert before <= statement.args[0] <= after


def test_insert_columns_and_values_stay_in_lockstep():
    statement = queries.compose_insert(BookingCreate(start=5, end=9, description="d"))

    assert statement.sql == (
        f"INSERT INTO booking (startdate, enddate, description) VALUES ($1, $2, $3){RETURNING}"
    )
    assert statement.args == (5, 9, "d")


def test_insert_with_end_only():
    statement = queries.compose_insert(BookingCreate(start=5, end=9))

    assert statement.sql == f"INSERT INTO booking (startdate, enddate) VALUES ($1, $2){RETURNING}"
    assert statement.args == (5, 9)


def test_update_without_fields_is_a_noop():
    assert queries.compose_update(1, BookingUpdate()) is None


@pytest.mark.parametrize(
    "changes, assignment, value",
    [
        (BookingUpdate(start=1), "startdate = $1", 1),
        (BookingUpdate(end=2), "enddate = $1", 2),
        (BookingUpdate(description="z"), "description = $1", "z"),
    ],
)
def test_update_with_one_field_has_one_clean_assignment(changes, assignment, value):
    statement = queries.compose_update(7, changes)

    assert statement.sql == f"UPDATE booking SET {assignment} WHERE id = $2{RETURNING}"
    assert statement.args == (value, 7)


def test_update_skipping_first_field_has_no_leading_comma():
    statement = queries.compose_update(7, BookingUpdate(end=2, description="z"))

    assert statement.sql == (
        f"UPDATE booking SET enddate = $1, description = $2 WHERE id = $3{RETURNING}"
    )
    assert statement.args == (2, "z", 7)


def test_update_all_fields():
    statement = queries.compose_update(7, BookingUpdate(start=1, end=2, description="z"))

    assert statement.sql == (
        "UPDATE booking SET startdate = $1, enddate = $2, description = $3"
        f" WHERE id = $4{RETURNING}"
    )


def test_update_allows_clearing_description():
    statement = queries.compose_update(7, BookingUpdate(description=""))
    assert statement.args == ("", 7)


def test_finish_only_matches_running_booking():
    statement = queries.compose_finish(3, now_ms=500)

    assert statement.sql == (
        "UPDATE booking SET enddate = GREATEST($1, startdate)"
        f" WHERE id = $2 AND enddate IS NULL{RETURNING}"
    )
    assert statement.args == (500, 3)


def test_delete_statements():
    assert queries.compose_delete_assignments(4).sql == "DELETE FROM tagassignment WHERE booking_id = $1"
    assert queries.compose_delete(4).sql == f"DELETE FROM booking WHERE id = $1{RETURNING}"
    assert queries.compose_delete(4).args == (4,)
