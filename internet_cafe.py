from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
import re


DEFAULT_NUMBER_OF_COMPUTERS = 5
DEFAULT_RATE_PER_HOUR = 20.0
CURRENCY = "PHP"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
NOT_APPLICABLE = "N/A"

MILLIS_PER_HOUR = 1000 * 60 * 60


def format_money(amount: float) -> str:
    return f"{CURRENCY} {amount:.2f}"


def parse_int(raw: str) -> int:
    """Parse an optionally negative run of ASCII digits, nothing else"""
    text = raw.strip()
    if not re.fullmatch(r"-?[0-9]+", text):
        raise ValueError(f"not an integer: {raw!r}")
    return int(text)


# ==================== Enums ====================

class StationStatus(Enum):
    """Occupancy status of a station"""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"


class MenuOption(Enum):
    """Console menu commands"""
    EXIT = 0
    SHOW_COMPUTERS = 1
    RENT = 2
    STOP = 3
    ACTIVE_CUSTOMERS = 4
    ALL_CUSTOMERS = 5
    TOTAL_REVENUE = 6


# ==================== Strategy Pattern: Time Source ====================

class Clock(ABC):
    """Abstract time source used for session timing"""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time"""
        pass


class SystemClock(Clock):
    """Reads the local wall clock"""

    def now(self) -> datetime:
        return datetime.now()


# ==================== Core Models ====================

class Customer:
    """Represents a cafe customer and their cumulative spend"""

    def __init__(self, customer_id: str, name: str):
        self._customer_id = customer_id
        self._name = name
        self._total_spent = 0.0

    def get_id(self) -> str:
        return self._customer_id

    def get_name(self) -> str:
        return self._name

    def get_total_spent(self) -> float:
        return self._total_spent

    def add_spent(self, amount: float) -> None:
        self._total_spent += amount

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison"""
        return self._name.lower() == name.lower()

    def __repr__(self) -> str:
        return f"Customer({self._customer_id}, {self._name})"


class Station:
    """A rentable computer billed per hour of wall-clock use"""

    def __init__(self, station_id: int, rate_per_hour: float,
                 clock: Optional[Clock] = None):
        self._station_id = station_id
        self._rate_per_hour = rate_per_hour
        self._clock = clock or SystemClock()
        self._status = StationStatus.AVAILABLE
        self._current_user: Optional[Customer] = None
        self._session_start: Optional[datetime] = None
        self._lock = Lock()

    def get_id(self) -> int:
        return self._station_id

    def get_rate_per_hour(self) -> float:
        return self._rate_per_hour

    def get_status(self) -> StationStatus:
        return self._status

    def is_available(self) -> bool:
        return self._status == StationStatus.AVAILABLE

    def get_current_user(self) -> Optional[Customer]:
        return self._current_user

    def get_session_start(self) -> Optional[datetime]:
        return self._session_start

    def rent(self, customer: Customer) -> bool:
        """Start a session for customer. Refused if the station is occupied."""
        with self._lock:
            if self._status != StationStatus.AVAILABLE:
                return False

            self._status = StationStatus.OCCUPIED
            self._current_user = customer
            self._session_start = self._clock.now()
            return True

    def stop_rent(self) -> float:
        """
        End the running session and bill the occupant.

        The charge is linear in elapsed whole milliseconds and is not rounded.
        Returns 0.0 without side effects when the station is already free.
        """
        receipt = self.end_session()
        return receipt.payment if receipt else 0.0

    def end_session(self) -> Optional['SessionReceipt']:
        """Atomically bill and release the station. None when it is already free."""
        with self._lock:
            if self._status == StationStatus.AVAILABLE:
                return None

            ended_at = self._clock.now()
            elapsed_millis = (ended_at - self._session_start) // timedelta(milliseconds=1)
            elapsed_hours = elapsed_millis / MILLIS_PER_HOUR
            payment = elapsed_hours * self._rate_per_hour

            self._current_user.add_spent(payment)
            receipt = SessionReceipt(
                station_id=self._station_id,
                customer_name=self._current_user.get_name(),
                started_at=self._session_start,
                ended_at=ended_at,
                payment=payment
            )

            self._status = StationStatus.AVAILABLE
            self._current_user = None
            self._session_start = None
            return receipt

    def get_elapsed_minutes(self) -> int:
        """Whole minutes since the session started, 0 when free"""
        start = self._session_start
        if start is None:
            return 0
        return (self._clock.now() - start) // timedelta(minutes=1)

    def get_formatted_start_time(self) -> str:
        if self._session_start is not None:
            return self._session_start.strftime(TIME_FORMAT)
        return NOT_APPLICABLE

    def __repr__(self) -> str:
        if self.is_available():
            return f"[ Computer ] {self._station_id} - Available"
        return (f"Computer {self._station_id} - Occupied by: {self._current_user.get_name()}"
                f" | Session Start: {self.get_formatted_start_time()}")


@dataclass
class ActiveSession:
    """Snapshot of one occupied station"""
    station_id: int
    customer_name: str
    start_time: str
    elapsed_minutes: int


@dataclass
class CustomerSummary:
    """Name and cumulative spend of a customer"""
    name: str
    total_spent: float

    def __repr__(self) -> str:
        return f"Name: {self.name}, Total Spent: {format_money(self.total_spent)}"


@dataclass
class SessionReceipt:
    """A completed and paid session"""
    station_id: int
    customer_name: str
    started_at: datetime
    ended_at: datetime
    payment: float

    def __repr__(self) -> str:
        return (f"Receipt(Computer {self.station_id}, {self.customer_name}, "
                f"{format_money(self.payment)})")


# ==================== Internet Cafe ====================

class InternetCafe:
    """Owns the stations, the customers and the revenue of one cafe"""

    def __init__(self, number_of_computers: int, rate_per_hour: float,
                 clock: Optional[Clock] = None):
        if number_of_computers < 1:
            raise ValueError(f"number_of_computers must be positive, got {number_of_computers}")
        if rate_per_hour <= 0:
            raise ValueError(f"rate_per_hour must be positive, got {rate_per_hour}")

        self._clock = clock or SystemClock()
        self._rate_per_hour = rate_per_hour
        self._computers: List[Station] = [
            Station(station_id, rate_per_hour, self._clock)
            for station_id in range(1, number_of_computers + 1)
        ]
        self._customers: List[Customer] = []  # first-seen order
        self._session_history: List[SessionReceipt] = []
        self._total_revenue = 0.0
        self._lock = Lock()

    def get_number_of_computers(self) -> int:
        return len(self._computers)

    def get_rate_per_hour(self) -> float:
        return self._rate_per_hour

    def get_computers(self) -> List[Station]:
        return list(self._computers)

    def is_valid_computer_id(self, station_id: int) -> bool:
        return 1 <= station_id <= len(self._computers)

    def get_computer(self, station_id: int) -> Optional[Station]:
        """Find a station by id"""
        for computer in self._computers:
            if computer.get_id() == station_id:
                return computer
        return None

    def get_or_create_customer(self, name: str) -> Customer:
        """Return the customer with this name (any casing), registering a new one on first use"""
        with self._lock:
            for customer in self._customers:
                if customer.matches(name):
                    return customer

            customer_id = f"CUST-{len(self._customers) + 1:04d}"
            customer = Customer(customer_id, name)
            self._customers.append(customer)

        print(f"[Cafe] Registered customer: {customer}")
        return customer

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        with self._lock:
            for customer in self._customers:
                if customer.get_id() == customer_id:
                    return customer
        return None

    def get_customers(self) -> List[Customer]:
        with self._lock:
            return list(self._customers)

    def add_revenue(self, amount: float) -> None:
        with self._lock:
            self._total_revenue += amount

    def get_total_revenue(self) -> float:
        with self._lock:
            return self._total_revenue

    def get_session_history(self) -> List[SessionReceipt]:
        with self._lock:
            return list(self._session_history)

    def list_active_sessions(self) -> List[ActiveSession]:
        """Occupied stations with live elapsed minutes"""
        sessions = []
        for computer in self._computers:
            user = computer.get_current_user()
            if computer.is_available() or user is None:
                continue
            sessions.append(ActiveSession(
                station_id=computer.get_id(),
                customer_name=user.get_name(),
                start_time=computer.get_formatted_start_time(),
                elapsed_minutes=computer.get_elapsed_minutes()
            ))
        return sessions

    def list_all_customers(self) -> List[CustomerSummary]:
        return [
            CustomerSummary(customer.get_name(), customer.get_total_spent())
            for customer in self.get_customers()
        ]

    # ---------- Rental workflow ----------

    def rent_computer(self, station_id: int, name: str) -> Optional[Station]:
        """Start a session on station_id for the named customer"""
        if not self.is_valid_computer_id(station_id):
            print(f"[Cafe] Invalid computer ID: {station_id}")
            return None

        computer = self.get_computer(station_id)
        if computer is None or not computer.is_available():
            print(f"[Cafe] Computer {station_id} not available")
            return None

        name = name.strip()
        if not name:
            print("[Cafe] Customer name cannot be empty")
            return None

        customer = self.get_or_create_customer(name)
        if not computer.rent(customer):
            print(f"[Cafe] Computer {station_id} not available")
            return None

        print(f"{name} rented Computer {station_id}. "
              f"Session started at {computer.get_formatted_start_time()}")
        return computer

    def stop_computer(self, station_id: int) -> Optional[SessionReceipt]:
        """End the session on station_id, bill it and book the revenue"""
        if not self.is_valid_computer_id(station_id):
            print(f"[Cafe] Invalid computer ID: {station_id}")
            return None

        computer = self.get_computer(station_id)
        receipt = computer.end_session() if computer is not None else None
        if receipt is None:
            print(f"[Cafe] Computer {station_id} is not currently rented")
            return None

        with self._lock:
            self._total_revenue += receipt.payment
            self._session_history.append(receipt)

        print(f"Session ended for {receipt.customer_name}")
        print(f"Payment: {format_money(receipt.payment)}")
        return receipt

    # ---------- Display ----------

    def display_computers(self) -> None:
        print("\n==== [Computer Status] ====")
        for computer in self._computers:
            print(computer)

    def display_active_customers(self) -> None:
        print("\n===== ACTIVE CUSTOMERS =====")
        sessions = self.list_active_sessions()
        if not sessions:
            print("No active customers.")
            return

        for session in sessions:
            print(f"PC {session.station_id} | User: {session.customer_name} | "
                  f"Session Start: {session.start_time} | "
                  f"Elapsed: {session.elapsed_minutes} mins")

    def display_all_customers(self) -> None:
        print("\n--- All Customers ---")
        summaries = self.list_all_customers()
        if not summaries:
            print("No customers yet.")
            return

        for summary in summaries:
            print(summary)

    def display_total_revenue(self) -> None:
        print(f"Total Revenue: {format_money(self.get_total_revenue())}")


# ==================== Factory Pattern ====================

class InternetCafeFactory:
    """Factory for cafe configurations"""

    @staticmethod
    def create_standard_cafe() -> InternetCafe:
        """Five computers at the default hourly rate"""
        return InternetCafe(DEFAULT_NUMBER_OF_COMPUTERS, DEFAULT_RATE_PER_HOUR)

    @staticmethod
    def create_custom_cafe(number_of_computers: int, rate_per_hour: float,
                           clock: Optional[Clock] = None) -> InternetCafe:
        return InternetCafe(number_of_computers, rate_per_hour, clock)


# ==================== Console ====================

class CafeConsole:
    """Menu-driven operator console"""

    def __init__(self, cafe: InternetCafe, input_func: Callable[[str], str] = input):
        self._cafe = cafe
        self._input = input_func
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def display_menu(self) -> None:
        print("\n===== INTERNET CAFE =====")
        print("1. Show Computers")
        print("2. Rent a Computer")
        print("3. Stop Rent & Pay")
        print("4. View Active Customers")
        print("5. View All Customers")
        print("6. View Total Revenue")
        print("0. Exit")

    def run(self) -> None:
        """Read and dispatch commands until the operator exits"""
        self._running = True
        while self._running:
            self.display_menu()
            try:
                raw = self._input("Enter choice: ")
            except EOFError:
                self._exit()
                break

            try:
                choice = parse_int(raw)
            except ValueError:
                print("Invalid input. Please enter a number.")
                continue

            try:
                self.handle_choice(choice)
            except EOFError:
                self._exit()

    def handle_choice(self, choice: int) -> None:
        try:
            option = MenuOption(choice)
        except ValueError:
            print("Invalid choice. Please select 0-6.")
            return

        if option == MenuOption.SHOW_COMPUTERS:
            self._cafe.display_computers()
        elif option == MenuOption.RENT:
            self._rent()
        elif option == MenuOption.STOP:
            self._stop()
        elif option == MenuOption.ACTIVE_CUSTOMERS:
            self._cafe.display_active_customers()
        elif option == MenuOption.ALL_CUSTOMERS:
            self._cafe.display_all_customers()
        elif option == MenuOption.TOTAL_REVENUE:
            self._cafe.display_total_revenue()
        else:
            self._exit()

    def _read_computer_id(self, action: str, activity: str) -> Optional[int]:
        count = self._cafe.get_number_of_computers()
        raw = self._input(f"Enter computer ID to {action} (1-{count}): ")
        try:
            station_id = parse_int(raw)
        except ValueError:
            print(f"Invalid input for {activity}. Try again.")
            return None

        if not self._cafe.is_valid_computer_id(station_id):
            print(f"Invalid computer ID. Must be 1-{count}.")
            return None
        return station_id

    def _rent(self) -> None:
        station_id = self._read_computer_id("rent", "renting")
        if station_id is None:
            return

        computer = self._cafe.get_computer(station_id)
        if computer is None or not computer.is_available():
            print("Computer not available.")
            return

        name = self._input("Enter your name: ").strip()
        if not name:
            print("Name cannot be empty.")
            return

        self._cafe.rent_computer(station_id, name)

    def _stop(self) -> None:
        station_id = self._read_computer_id("stop", "stopping")
        if station_id is None:
            return

        computer = self._cafe.get_computer(station_id)
        if computer is None or computer.is_available():
            print("[Computer is not currently rented].")
            return

        self._cafe.stop_computer(station_id)

    def _exit(self) -> None:
        print("Thank you for using the system!")
        self._running = False


# ==================== Main Entry Point ====================

def main():
    try:
        cafe = InternetCafeFactory.create_standard_cafe()
        CafeConsole(cafe).run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by operator")
    except Exception as e:
        print(f"\n\nError occurred: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()


# Key Design Decisions
# Design Patterns Used:

# Strategy Pattern:

# Clock: SystemClock reads the wall clock, tests pass a manual clock
# Billing reads time only through the clock

# Factory Pattern:

# InternetCafeFactory.create_standard_cafe: 5 computers at PHP 20.00/hour
# InternetCafeFactory.create_custom_cafe: any size, rate and clock

# Core Components:

# Customer: name + cumulative spend, handle CUST-0001.. in first-seen order
# Station: AVAILABLE / OCCUPIED toggle, occupant and session start
# InternetCafe: stations 1..N, customers, revenue, session history
# CafeConsole: menu loop, input parsing and validation

# Business Rules:

# Payment = elapsed milliseconds / 3,600,000 x rate per hour
# No minimum charge, no cap, rounding only on display (2 decimals)
# Customer names are matched case-insensitively, first casing is kept
# Renting an occupied station is refused, the running session is kept
# Stopping a free station bills 0.00 and changes nothing

# Concurrency:

# Single operator, single thread
# Station and InternetCafe still guard their state with a Lock
# Station.rent and Station.end_session are atomic, registry listings are not
