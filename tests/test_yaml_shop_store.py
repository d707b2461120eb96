"""
Tests for the YAML shop data store.
"""

from pathlib import Path
from textwrap import dedent

import pytest

from barberslots.adapters.yaml_shop_store import YamlShopStore
from barberslots.domain.exceptions import RecordNotFoundError, ShopDataError
from barberslots.domain.models import AppointmentStatus, DaySlot, OpeningHours, Weekday

EXAMPLE_DATA = Path(__file__).parent.parent / "shop_data.example.yaml"


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "shop.yaml"
    path.write_text(dedent(content), encoding="utf-8")
    return path


class TestLoading:
    """Tests for loading and converting records."""

    def test_example_file_loads(self):
        store = YamlShopStore.from_path(EXAMPLE_DATA)

        assert [b.id for b in store.barbers()] == ["barber-owner", "barber-1", "barber-2"]
        assert store.get_service("service-3").duration == 45
        assert store.shop_hours()[Weekday.SUNDAY] is None
        assert store.shop_hours()[Weekday.SATURDAY] == OpeningHours(open="09:00", close="17:00")
        assert store.shop_name == "CutFlow Barbershop"

    def test_example_overrides_and_statuses(self):
        store = YamlShopStore.from_path(EXAMPLE_DATA)

        james = store.get_barber("barber-1")
        assert james.date_overrides["2024-06-10"] == ()
        assert james.availability[Weekday.SATURDAY] == (DaySlot("10:00", "15:00"),)
        assert [a.status for a in store.appointments()][-1] is AppointmentStatus.CANCELED

    def test_unquoted_yaml_values_are_coerced(self, tmp_path):
        path = _write(tmp_path, """
            shop:
              hours:
                monday: {open: 09:00, close: 19:00}
            barbers:
              - id: b1
                name: Test Barber
                availability:
                  Monday: [{start: 10:00, end: 15:30}]
                date_overrides:
                  2024-06-10: [{start: 12:00, end: 14:00}]
            appointments:
              - id: a1
                barber_id: b1
                date_time: 2024-06-10T12:00:00
                status: NoShow
        """)

        store = YamlShopStore.from_path(path)
        barber = store.get_barber("b1")

        assert store.shop_hours()[Weekday.MONDAY] == OpeningHours(open="09:00", close="19:00")
        assert barber.availability[Weekday.MONDAY] == (DaySlot("10:00", "15:30"),)
        assert barber.date_overrides == {"2024-06-10": (DaySlot("12:00", "14:00"),)}
        assert store.appointments()[0].date_time.startswith("2024-06-10T12:00")
        assert store.appointments()[0].status is AppointmentStatus.NO_SHOW

    def test_empty_file_gives_empty_store(self, tmp_path):
        store = YamlShopStore.from_path(_write(tmp_path, ""))

        assert store.barbers() == []
        assert store.shop_hours() == {}


class TestValidation:
    """Tests for rejecting malformed shop data."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ShopDataError, match="not found"):
            YamlShopStore.from_path(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ShopDataError, match="Invalid YAML"):
            YamlShopStore.from_path(_write(tmp_path, "barbers: [unclosed"))

    def test_root_must_be_mapping(self, tmp_path):
        with pytest.raises(ShopDataError, match="mapping"):
            YamlShopStore.from_path(_write(tmp_path, "- just\n- a list\n"))

    def test_typo_in_weekday(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - id: b1
                name: Test Barber
                availability:
                  mondy: [{start: "09:00", end: "17:00"}]
        """)

        with pytest.raises(ShopDataError, match="Unknown weekday name"):
            YamlShopStore.from_path(path)

    def test_malformed_time(self, tmp_path):
        path = _write(tmp_path, """
            shop:
              hours:
                monday: {open: "9am", close: "17:00"}
        """)

        with pytest.raises(ShopDataError, match="expected HH:MM"):
            YamlShopStore.from_path(path)

    def test_inverted_interval(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - id: b1
                name: Test Barber
                availability:
                  monday: [{start: "17:00", end: "09:00"}]
        """)

        with pytest.raises(ShopDataError, match="must be before end time"):
            YamlShopStore.from_path(path)

    def test_bad_override_key(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - id: b1
                name: Test Barber
                date_overrides:
                  "June 10": []
        """)

        with pytest.raises(ShopDataError, match="YYYY-MM-DD"):
            YamlShopStore.from_path(path)

    def test_unknown_status(self, tmp_path):
        path = _write(tmp_path, """
            appointments:
              - id: a1
                barber_id: b1
                date_time: "2024-06-10T10:00:00"
                status: Pending
        """)

        with pytest.raises(ShopDataError):
            YamlShopStore.from_path(path)

    def test_duplicate_barber_ids(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - {id: b1, name: One}
              - {id: b1, name: Two}
        """)

        with pytest.raises(ShopDataError, match="Duplicate id"):
            YamlShopStore.from_path(path)

    @pytest.mark.parametrize("timestamp", ["2024-06-10T25:99:00", "2024-6-10T10:00", "tomorrow"])
    def test_malformed_appointment_timestamp(self, tmp_path, timestamp):
        path = _write(tmp_path, f"""
            appointments:
              - id: a1
                barber_id: b1
                date_time: "{timestamp}"
        """)

        with pytest.raises(ShopDataError, match="Invalid timestamp"):
            YamlShopStore.from_path(path)

    def test_weekday_listed_twice(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - id: b1
                name: Test Barber
                availability:
                  Monday: [{start: "09:00", end: "12:00"}]
                  monday: [{start: "13:00", end: "17:00"}]
        """)

        with pytest.raises(ShopDataError, match="listed more than once"):
            YamlShopStore.from_path(path)

    def test_impossible_override_date(self, tmp_path):
        path = _write(tmp_path, """
            barbers:
              - id: b1
                name: Test Barber
                date_overrides:
                  "2024-13-45": []
        """)

        with pytest.raises(ShopDataError, match="YYYY-MM-DD"):
            YamlShopStore.from_path(path)

    def test_non_positive_service_duration(self, tmp_path):
        path = _write(tmp_path, """
            services:
              - {id: s1, name: Nothing, duration: 0}
        """)

        with pytest.raises(ShopDataError, match="greater than zero"):
            YamlShopStore.from_path(path)


class TestLookups:
    """Tests for record lookups."""

    def test_unknown_ids(self):
        store = YamlShopStore.from_path(EXAMPLE_DATA)

        with pytest.raises(RecordNotFoundError, match="barber"):
            store.get_barber("nobody")
        with pytest.raises(RecordNotFoundError, match="service"):
            store.get_service("perm")

    def test_find_barber_by_name(self):
        store = YamlShopStore.from_path(EXAMPLE_DATA)

        assert store.find_barber_by_name("deon williams").id == "barber-2"
        assert store.find_barber_by_name("Nobody") is None
