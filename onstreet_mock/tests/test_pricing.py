import pytest
from datetime import timedelta

from onstreet_mock.core.enums import ProductType, VehicleType
from onstreet_mock.services.catalog import ZoneCatalog
from onstreet_mock.services.pricing import build_rate_quote, generate_steps, get_rate, min_end_time


class TestStepGeneration:
    """Tariff blocks expanded into time-stamped rate steps"""

    @pytest.mark.parametrize("zone_id", ["blue", "green"])
    def test_one_step_per_block_in_order(self, catalog, fixed_now, zone_id):
        zone = catalog.get(zone_id)
        steps = generate_steps(zone, fixed_now)

        assert len(steps) == len(zone.blocks)
        for step, block in zip(steps, zone.blocks):
            assert step.minutes == block.minutes
            assert step.time_in_seconds == block.duration_seconds
            assert step.price_in_cents == block.price_in_cents

    def test_steps_end_from_same_reference_instant(self, catalog, fixed_now):
        zone = catalog.get("green")
        steps = generate_steps(zone, fixed_now)

        # 5 min block ends 5 min after now, not after the previous block
        assert steps[0].end_date_time == "2025-03-01T10:05:00.000Z"
        assert steps[1].end_date_time == "2025-03-01T10:10:00.000Z"
        assert steps[4].end_date_time == "2025-03-01T11:00:00.000Z"

    def test_unsorted_blocks_keep_declared_order(self, commission_zone, fixed_now):
        steps = generate_steps(commission_zone, fixed_now)

        assert [s.time_in_seconds for s in steps] == [3600, 900, 1800]

    def test_commission_only_where_configured(self, commission_zone, fixed_now):
        steps = generate_steps(commission_zone, fixed_now)
        dumped = [s.model_dump(by_alias=True) for s in steps]

        assert dumped[0]["commissionPriceInCents"] == 10
        assert dumped[1]["commissionPriceInCents"] == 5
        assert "commissionPriceInCents" not in dumped[2]

    def test_default_zones_have_no_commission_key(self, catalog, fixed_now):
        for zone in catalog.zones():
            for step in generate_steps(zone, fixed_now):
                assert "commissionPriceInCents" not in step.model_dump(by_alias=True)

    def test_empty_zone_yields_no_steps(self, empty_zone, fixed_now):
        assert generate_steps(empty_zone, fixed_now) == []


class TestMinEndTime:

    def test_matches_minimum_block_duration_for_all_zones(self, catalog):
        for zone in catalog.zones():
            assert min_end_time(zone) == min(b.duration_seconds for b in zone.blocks)

    def test_blue_zone(self, catalog):
        assert min_end_time(catalog.get("blue")) == 180

    def test_unsorted_blocks(self, commission_zone):
        assert min_end_time(commission_zone) == 900

    def test_empty_zone_is_none(self, empty_zone):
        assert min_end_time(empty_zone) is None


class TestRateQuote:

    def test_quote_fields(self, catalog, fixed_now):
        quote = build_rate_quote(catalog.get("green"), fixed_now)

        assert quote.id == "green"
        assert quote.vehicle_type == VehicleType.CAR
        assert quote.product_type == ProductType.STANDARD
        assert quote.average_stay_duration == 30
        assert quote.can_drive_off is True
        assert quote.extensible is True
        assert quote.cold_down_time == 120
        assert quote.name == "Zona verde"
        assert quote.color == "#01AE00"
        assert quote.description == "Zona verde - Tarifa por bloques"

        rs = quote.rate_steps
        assert rs.first_step_starts_at == "2025-03-01T10:00:00.000Z"
        assert rs.price_requested_at == "2025-03-01T10:00:00.000Z"
        assert rs.start_time_in_seconds == 0
        assert rs.min_end_time_in_seconds == 300
        assert rs.ticket_id == 1
        assert rs.time_zone == "Europe/Madrid"
        assert rs.currency == "EUR"
        assert rs.error_msg_list == []
        assert rs.payment_methods == ["CASH", "BIZUM", "CARD"]
        assert rs.max_duration_seconds == 5400

    def test_wire_field_names(self, catalog, fixed_now):
        data = build_rate_quote(catalog.get("blue"), fixed_now).model_dump(by_alias=True, mode="json")

        assert set(data) == {
            "id", "vehicleType", "productType", "averageStayDuration", "canDriveOff",
            "extensible", "coldDownTime", "name", "color", "description", "rateSteps",
        }
        assert set(data["rateSteps"]) == {
            "steps", "firstStepStartsAt", "startTimeInSeconds", "minEndTimeInSeconds",
            "ticketId", "priceRequestedAt", "timeZone", "currency", "errorMsgList",
            "paymentMethods", "maxDurationSeconds",
        }
        assert data["vehicleType"] == "CAR"
        assert data["rateSteps"]["steps"][0] == {
            "minutos": 3,
            "timeInSeconds": 180,
            "priceInCents": 80,
            "endDateTime": "2025-03-01T10:03:00.000Z",
        }

    def test_empty_zone_quote_has_null_min_end_time(self, empty_zone, fixed_now):
        data = build_rate_quote(empty_zone, fixed_now).model_dump(by_alias=True, mode="json")

        assert data["rateSteps"]["steps"] == []
        assert data["rateSteps"]["minEndTimeInSeconds"] is None

    def test_prices_are_integer_cents(self, catalog, fixed_now):
        for zone in catalog.zones():
            for step in build_rate_quote(zone, fixed_now).rate_steps.steps:
                assert isinstance(step.price_in_cents, int)


class TestGetRate:

    def test_unknown_zone_is_empty_list(self, catalog, fixed_now):
        assert get_rate(catalog, "doesnotexist", fixed_now) == []

    def test_known_zone_is_single_item(self, catalog, fixed_now):
        result = get_rate(catalog, "blue", fixed_now)

        assert len(result) == 1
        assert result[0].id == "blue"

    def test_same_instant_is_idempotent(self, catalog, fixed_now):
        first = get_rate(catalog, "green", fixed_now)[0]
        second = get_rate(catalog, "green", fixed_now)[0]

        assert first.model_dump(by_alias=True) == second.model_dump(by_alias=True)

    def test_different_instants_only_move_timestamps(self, catalog, fixed_now):
        first = get_rate(catalog, "blue", fixed_now)[0]
        later = get_rate(catalog, "blue", fixed_now + timedelta(minutes=7))[0]

        for a, b in zip(first.rate_steps.steps, later.rate_steps.steps):
            assert (a.minutes, a.time_in_seconds, a.price_in_cents) == (b.minutes, b.time_in_seconds, b.price_in_cents)
            assert a.end_date_time != b.end_date_time
        assert later.rate_steps.price_requested_at == "2025-03-01T10:07:00.000Z"

    def test_custom_catalog(self, commission_zone, fixed_now):
        catalog = ZoneCatalog([commission_zone])
        result = get_rate(catalog, "coche", fixed_now)

        assert result[0].rate_steps.min_end_time_in_seconds == 900
        assert result[0].rate_steps.max_duration_seconds == 7200
