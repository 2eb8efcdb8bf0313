#!/usr/bin/env python3
"""Tests for VehicleRecord class."""

from datetime import date

import pytest
from autocare import ConfigurationError, HistoryEntry, ServiceRecord, VehicleRecord
from autocare.vehicle import parse_service_date


class TestVehicleCurrentMileage:
    """Tests for VehicleRecord.current_mileage auto-computation."""

    def test_explicit_state_takes_precedence(self):
        vehicle = VehicleRecord(
            1,
            history=[HistoryEntry("oil_change", "2025-01-15", mileage=50000)],
            state_current_mileage=60000,
        )
        assert vehicle.current_mileage == 60000

    def test_computed_from_history(self):
        vehicle = VehicleRecord(
            1,
            history=[
                HistoryEntry("oil_change", "2025-01-01", mileage=30000),
                HistoryEntry("tire_rotation", "2025-01-15", mileage=35000),
                HistoryEntry("brake_service", "2025-01-10"),
            ],
        )
        assert vehicle.current_mileage == 35000

    def test_defaults_to_zero(self):
        assert VehicleRecord(1).current_mileage == 0

    def test_name_defaults_to_id(self):
        assert VehicleRecord(7).name == "7"


class TestVehicleHistoryLookup:
    """Tests for VehicleRecord history lookup methods."""

    @pytest.fixture
    def vehicle(self):
        return VehicleRecord(
            1,
            history=[
                HistoryEntry("oil_change", "2024-06-01", mileage=40000),
                HistoryEntry("tire_rotation", "2024-06-01", mileage=40000),
                HistoryEntry("oil_change", "2025-01-15", mileage=45000),
                HistoryEntry("oil_change", "2025-01-15", mileage=45100),
            ],
        )

    def test_categories_first_seen_order(self, vehicle):
        assert vehicle.categories == ["oil_change", "tire_rotation"]

    def test_get_last_service_most_recent(self, vehicle):
        last = vehicle.get_last_service("oil_change")
        assert last.date == "2025-01-15"
        # Same-day entries break ties on mileage
        assert last.mileage == 45100

    def test_get_last_service_none(self, vehicle):
        assert vehicle.get_last_service("brake_service") is None

    def test_history_sorted_by_date_desc(self, vehicle):
        dates = [h.date for h in vehicle.get_history_sorted()]
        assert dates == sorted(dates, reverse=True)

    def test_history_sorted_by_miles_asc(self, vehicle):
        miles = [h.mileage for h in vehicle.get_history_sorted("miles", reverse=False)]
        assert miles == [40000, 40000, 45000, 45100]

    def test_history_sorted_by_category(self, vehicle):
        entries = vehicle.get_history_sorted("category", reverse=False)
        assert entries[-1].category == "tire_rotation"


class TestVehicleServiceState:
    """Tests for mapping history into the engine's service state."""

    def test_service_state(self):
        vehicle = VehicleRecord(
            42,
            history=[
                HistoryEntry("oil_change", "2024-06-01", mileage=40000),
                HistoryEntry("oil_change", "2025-01-15", mileage=45000),
                HistoryEntry("brake_service", "2024-03-01"),
            ],
            state_current_mileage=47000,
        )
        now = date(2025, 8, 1)
        state = vehicle.service_state(now)

        assert state.vehicle_id == 42
        assert state.current_mileage == 47000
        assert state.current_date == now
        assert state.services["oil_change"] == ServiceRecord(date(2025, 1, 15), 45000)
        assert state.services["brake_service"] == ServiceRecord(date(2024, 3, 1), None)

    def test_missing_category_is_never_serviced(self):
        state = VehicleRecord(1).service_state(date(2025, 1, 1))
        assert state.service_for("oil_change") == ServiceRecord(None, None)


class TestParseServiceDate:
    """Tests for reading history dates into the service state."""

    def test_iso_date(self):
        entry = HistoryEntry("oil_change", "2025-03-10")
        assert parse_service_date(entry) == date(2025, 3, 10)

    def test_timestamp_keeps_date_part(self):
        """YAML timestamps like '2025-03-10 09:30:00' use their date part."""
        entry = HistoryEntry("oil_change", "2025-03-10 09:30:00")
        assert parse_service_date(entry) == date(2025, 3, 10)
        assert parse_service_date(
            HistoryEntry("oil_change", "2025-03-10T09:30:00")
        ) == date(2025, 3, 10)

    def test_missing_date(self):
        assert parse_service_date(HistoryEntry("oil_change", "")) is None

    def test_invalid_date(self):
        entry = HistoryEntry("oil_change", "last spring")
        with pytest.raises(ConfigurationError) as exc:
            parse_service_date(entry)
        assert "oil_change" in str(exc.value)

    def test_service_state_with_timestamp(self):
        vehicle = VehicleRecord(
            1, history=[HistoryEntry("oil_change", "2025-03-10 09:30:00", 50000)]
        )
        state = vehicle.service_state(date(2025, 8, 15))
        assert state.services["oil_change"].last_service_date == date(2025, 3, 10)
