from datetime import datetime, timedelta

import pytest

from internet_cafe import Clock, Customer, Station, StationStatus


@pytest.fixture
def station(clock):
    return Station(1, 20.0, clock)


@pytest.fixture
def alice():
    return Customer("CUST-0001", "Alice")


def test_new_station_is_available(station):
    assert station.is_available()
    assert station.get_status() == StationStatus.AVAILABLE
    assert station.get_current_user() is None
    assert station.get_session_start() is None
    assert station.get_formatted_start_time() == "N/A"


def test_rent_occupies_station(station, alice, clock):
    assert station.rent(alice) is True

    assert not station.is_available()
    assert station.get_current_user() is alice
    assert station.get_session_start() == clock.now()
    assert station.get_formatted_start_time() == "2024-03-15 09:30:00"


def test_rent_then_immediate_stop_bills_nothing(station, alice):
    station.rent(alice)

    assert station.stop_rent() == 0.0
    assert alice.get_total_spent() == 0.0
    assert station.is_available()


def test_stop_on_available_station_is_noop(station):
    assert station.stop_rent() == 0.0
    assert station.is_available()
    assert station.get_current_user() is None
    assert station.get_session_start() is None


def test_stop_bills_elapsed_hours_and_releases(station, alice, clock):
    station.rent(alice)
    clock.advance(hours=1)

    payment = station.stop_rent()

    assert payment == pytest.approx(20.0)
    assert alice.get_total_spent() == pytest.approx(20.0)
    assert station.is_available()
    assert station.get_current_user() is None
    assert station.get_session_start() is None


def test_billing_is_linear_in_elapsed_time(station, alice, clock):
    station.rent(alice)
    clock.advance(minutes=15)
    short = station.stop_rent()

    station.rent(alice)
    clock.advance(minutes=30)
    double = station.stop_rent()

    assert short == pytest.approx(5.0)
    assert double == pytest.approx(2 * short)


def test_billing_has_no_minimum_and_no_rounding(station, alice, clock):
    station.rent(alice)
    clock.advance(seconds=1)

    assert station.stop_rent() == pytest.approx(20.0 / 3600)


def test_billing_ignores_sub_millisecond_remainder(station, alice, clock):
    station.rent(alice)
    clock.advance(microseconds=999)

    assert station.stop_rent() == 0.0


def test_rent_on_occupied_station_keeps_running_session(station, alice, clock):
    bob = Customer("CUST-0002", "Bob")
    station.rent(alice)
    started = station.get_session_start()
    clock.advance(minutes=10)

    assert station.rent(bob) is False
    assert station.get_current_user() is alice
    assert station.get_session_start() == started


def test_total_spent_accumulates_over_sessions(station, alice, clock):
    payments = []
    for minutes in (45, 90, 6):
        station.rent(alice)
        clock.advance(minutes=minutes)
        payments.append(station.stop_rent())

    assert alice.get_total_spent() == pytest.approx(sum(payments))


def test_availability_matches_occupant_at_every_step(station, alice, clock):
    def consistent():
        return station.is_available() == (station.get_current_user() is None) \
            == (station.get_session_start() is None)

    assert consistent()
    station.rent(alice)
    assert consistent()
    clock.advance(minutes=5)
    station.stop_rent()
    assert consistent()
    station.stop_rent()
    assert consistent()


def test_end_session_receipt_matches_billed_duration(alice):
    class SteppingClock(Clock):
        """Moves 30 minutes forward on every read"""

        def __init__(self):
            self._now = datetime(2024, 3, 15, 9, 30, 0)

        def now(self):
            current = self._now
            self._now += timedelta(minutes=30)
            return current

    clock = SteppingClock()
    station = Station(1, 20.0, clock)
    station.rent(alice)

    receipt = station.end_session()

    assert receipt.ended_at - receipt.started_at == timedelta(minutes=30)
    assert receipt.payment == pytest.approx(10.0)
    assert receipt.customer_name == "Alice"
    assert station.is_available()
    assert station.end_session() is None


def test_elapsed_minutes_floors(station, alice, clock):
    assert station.get_elapsed_minutes() == 0
    station.rent(alice)
    clock.advance(minutes=2, seconds=59)

    assert station.get_elapsed_minutes() == 2


def test_repr(station, alice):
    assert repr(station) == "[ Computer ] 1 - Available"

    station.rent(alice)

    assert repr(station) == ("Computer 1 - Occupied by: Alice | "
                             "Session Start: 2024-03-15 09:30:00")
