"""
Unit Tests for the Lane Builder

Tests STD/LTL entry expansion, insert statements and per-record isolation
of bulk inserts. The database is replaced by a stand-in; nothing connects.

Run with: pytest rating/tests/test_build_lanes.py -v
"""

from datetime import date

import pytest

import shared.database
import rating.maintenance.build_lanes as build_lanes_module
from rating.errors import ValidationError
from rating.maintenance import (
    LanePoint,
    LtlEntry,
    StdBuilderSettings,
    StdEntry,
    ZipRange,
    build_ltl_lanes,
    build_std_lanes,
    expand_ltl_entry,
    expand_std_entries,
    insert_lanes,
    ltl_insert_statement,
    std_insert_statement,
)


@pytest.fixture
def settings():
    return StdBuilderSettings(
        precedence_type=12,
        mode="V",
        carrier_code="AAAA",
        effective_from=date(2026, 1, 1),
        effective_to=date(2026, 12, 31),
    )


@pytest.fixture
def entry():
    return StdEntry(
        origin=LanePoint(state="IL"),
        destination=LanePoint(state="TX"),
        rate_per_mile=2.1,
        minimum_charge=450.0,
        fuel_included=True,
    )


@pytest.fixture
def ltl_entry():
    return LtlEntry(
        carrier_code="LTLA",
        from_states=["IL", "WI"],
        to_states="TX",
        discount=60.0,
        minimum_charge=100.0,
        class_range=(50.0, 500.0),
        weight_range=(0.0, 10000.0),
        effective_from=date(2026, 1, 1),
        effective_to=date(2026, 12, 31),
    )


@pytest.fixture
def fake_db(monkeypatch):
    """Replace per-statement execution; statements mentioning 'BAD' fail."""
    executed = []

    def execute(statement):
        query, params = statement
        executed.append(statement)
        if "BAD" in params:
            return RuntimeError("Error executing statement: constraint violated")
        return None

    monkeypatch.setattr(shared.database, "_execute_isolated", execute)
    return executed



class BrokenConnection:
    """Connection whose execute fails on 'BAD' params and whose rollback and close also fail."""

    def __init__(self):
        self.committed = False

    def cursor(self):
        return self

    def execute(self, query, params):
        if "BAD" in params:
            raise Exception("connection lost")

    def commit(self):
        self.committed = True

    def rollback(self):
        raise Exception("connection lost during rollback")

    def close(self):
        if not self.committed:
            raise Exception("connection already closed")


@pytest.fixture
def broken_connections(monkeypatch):
    """Real per-statement execution over connections that fail hard on 'BAD'."""
    opened = []

    def connect():
        conn = BrokenConnection()
        opened.append(conn)
        return conn

    monkeypatch.setattr(shared.database, "_connect", connect)
    return opened


# =============================================================================
# STD
# =============================================================================

class TestExpandStd:
    """STD builder entries -> lane records."""

    def test_single_record(self, settings, entry):
        records = expand_std_entries(settings, [entry])
        assert len(records) == 1
        record = records[0]
        assert record["carrier_code"] == "AAAA"
        assert record["precedence"] == 12
        assert record["effective_from"] == 20260101
        assert record["effective_to"] == 20261231
        assert record["origin_state"] == "IL"
        assert record["destination_state"] == "TX"
        assert record["fuel_included"] == "Y"
        assert record["origin_country"] == "USA"

    def test_mileage_type_crosses_points(self, settings, entry):
        points = [
            LanePoint(city="Chicago", state="IL"),
            LanePoint(zip_from="75200", zip_to="75299"),
        ]
        records = expand_std_entries(settings._replace(precedence_type=90), [entry], points)
        assert len(records) == 4
        origins = [(r["origin_city"], r["origin_state"], r["origin_zip_from"]) for r in records]
        assert origins == [
            ("Chicago", "IL", ""),
            ("Chicago", "IL", ""),
            ("", "IL", "75200"),
            ("", "IL", "75200"),
        ]
        # Entry state kept where the point has none
        assert records[1]["destination_state"] == "TX"
        assert records[1]["destination_zip_to"] == "75299"

    def test_mileage_type_requires_points(self, settings, entry):
        with pytest.raises(ValidationError, match="mileage point"):
            expand_std_entries(settings._replace(precedence_type=90), [entry])

    def test_insert_statement(self, settings, entry):
        record = expand_std_entries(settings, [entry])[0]
        query, params = std_insert_statement(record)
        assert query.startswith("INSERT INTO rating.std_lanes (precedence, mode, carrier_code")
        assert query.count("%s") == len(record)
        assert params == list(record.values())


# =============================================================================
# LTL
# =============================================================================

class TestExpandLtl:
    """LTL builder submissions -> lane records."""

    def test_state_lists(self, ltl_entry):
        records = expand_ltl_entry(ltl_entry)
        assert [(r["origin_states"], r["destination_states"]) for r in records] == [("IL", "TX"), ("WI", "TX")]
        assert records[0]["origin_zip_from"] == "0"
        assert records[0]["origin_zip_to"] == "99999"
        assert records[0]["class_from"] == 50.0

    def test_zip_ranges_resolve_state(self, ltl_entry):
        entry = ltl_entry._replace(
            origin_zips=[ZipRange("60600", "60699"), ZipRange("53200", "53299")],
            destination_zips=[ZipRange("75200", "75299")],
        )
        postal_states = {"606": "IL", "532": "WI", "752": "TX"}
        records = expand_ltl_entry(entry, postal_states)
        assert len(records) == 2
        assert [r["origin_states"] for r in records] == ["IL", "WI"]
        assert records[0]["destination_states"] == "TX"
        assert records[1]["origin_zip_to"] == "53299"

    def test_label(self, ltl_entry):
        records = expand_ltl_entry(ltl_entry._replace(from_states="*INTER", to_states="*INTER"))
        assert len(records) == 1
        assert records[0]["origin_states"] == "*INTER"

    def test_missing_states(self, ltl_entry):
        with pytest.raises(ValidationError, match="From states"):
            expand_ltl_entry(ltl_entry._replace(from_states=[]))
        with pytest.raises(ValidationError, match="To states"):
            expand_ltl_entry(ltl_entry._replace(to_states=""))

    def test_insert_skips_existing(self, ltl_entry):
        record = expand_ltl_entry(ltl_entry)[0]
        query, params = ltl_insert_statement(record)
        assert "WHERE NOT EXISTS" in query
        assert query.count("%s") == len(params)
        assert params[:len(record)] == list(record.values())


# =============================================================================
# INSERTS
# =============================================================================

class TestInsertLanes:
    """Bulk insert with per-record isolation."""

    def test_failure_does_not_abort_batch(self, fake_db):
        statements = [
            ("INSERT 1", ["ok"]),
            ("INSERT 2", ["BAD"]),
            ("INSERT 3", ["ok"]),
        ]
        results = insert_lanes(statements, max_workers=2, verbose=False)
        assert len(fake_db) == 3
        assert results[0] is None
        assert isinstance(results[1], RuntimeError)
        assert results[2] is None

    def test_failed_rollback_does_not_abort_batch(self, broken_connections):
        statements = [
            ("INSERT 1", ["ok"]),
            ("INSERT 2", ["BAD"]),
            ("INSERT 3", ["ok"]),
        ]
        results = insert_lanes(statements, max_workers=2, verbose=False)
        assert len(broken_connections) == 3
        assert results[0] is None
        assert isinstance(results[1], RuntimeError)
        assert "connection lost" in str(results[1])
        assert "rollback" not in str(results[1])
        assert results[2] is None

    def test_empty_batch(self, fake_db):
        assert insert_lanes([], verbose=False) == []
        assert fake_db == []

    def test_build_std(self, fake_db, settings, entry):
        results = build_std_lanes(settings, [entry, entry._replace(note="BAD")], verbose=False)
        assert results[0] is None
        assert isinstance(results[1], RuntimeError)

    def test_build_ltl(self, fake_db, ltl_entry):
        results = build_ltl_lanes(ltl_entry, verbose=False)
        assert results == [None, None]
        assert all("rating.ltl_lanes" in query for query, _ in fake_db)

    def test_build_ltl_loads_postal_states(self, fake_db, ltl_entry, monkeypatch):
        monkeypatch.setattr(build_lanes_module, "load_postal_states", lambda: {"606": "IL", "752": "TX"})
        entry = ltl_entry._replace(
            origin_zips=[ZipRange("60600", "60699")],
            destination_zips=[ZipRange("75200", "75299")],
        )
        assert build_ltl_lanes(entry, verbose=False) == [None]
        _, params = fake_db[0]
        assert params[3:5] == ["IL", "TX"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
