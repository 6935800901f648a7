"""
Offline console demo: drives the doctor dashboard from the terminal.

Uses the real appointment store, approval workflow, availability
calculator and booking service over seeded demo patients. No browser,
no backend. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario approval
    python console_demo.py --scenario availability
"""

import argparse
from datetime import date
from typing import Callable, Optional

from dentalcare.appointments import AppointmentStore, ApprovalWorkflow, BookingService
from dentalcare.config import settings
from dentalcare.dashboard import CalendarView, StatsCalculator
from dentalcare.errors import SchedulingError
from dentalcare.logging_context import new_session_id, set_session_id
from dentalcare.mock_data import seed_demo_appointments
from dentalcare.scheduling import AvailabilityCalculator, SlotState
from dentalcare.schemas.appointment_schema import AppointmentStatus, Notification, Severity

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

STATUS_COLORS = {
    AppointmentStatus.PENDING: YELLOW,
    AppointmentStatus.APPROVED: GREEN,
    AppointmentStatus.REJECTED: RED,
}

SLOT_COLORS = {
    SlotState.FREE: BLUE,
    SlotState.BOOKED: DIM,
    SlotState.BREAK: YELLOW,
}


class DashboardConsole:
    """One dashboard session: its own store, workflow and view state."""

    def __init__(self, today: Optional[Callable[[], date]] = None, seed: bool = True) -> None:
        self.session_id = new_session_id()
        set_session_id(self.session_id)
        self.store = AppointmentStore(today=today or date.today)
        self.workflow = ApprovalWorkflow(self.store)
        self.calculator = AvailabilityCalculator(self.store)
        self.booking = BookingService(self.store, self.calculator)
        self.calendar = CalendarView(self.store, self.workflow)
        self.stats = StatsCalculator(self.store, self.workflow)
        if seed:
            seed_demo_appointments(self.store, self.workflow)

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def error(self, text: str) -> None:
        print(f"{RED}{BOLD}[Error]{RESET} {RED}{text}{RESET}")

    def toast(self, notification: Notification) -> None:
        color = RED if notification.severity == Severity.DESTRUCTIVE else GREEN
        print(f"{color}{BOLD}[{notification.title}]{RESET} {color}{notification.message}{RESET}")

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "dashboard": [
            "stats",
            "pending",
        ],
        "approval": [
            "pending",
            "approve first",
            "approve last-approved",
            "stats",
        ],
        "availability": [
            "next",
            "slots",
            "dates",
        ],
        "booking": [
            "next",
            "book next|Alex Carter|alex.carter@example.com|(555) 222-3333|Cleaning",
            "pending",
        ],
    }

    HELP = (
        "Commands: stats | pending | day YYYY-MM-DD | tab all|pending|approved|rejected | "
        "list | slots [YYYY-MM-DD] | dates | next | approve ID | reject ID | "
        "book DATE|TIME|NAME|EMAIL|PHONE[|NOTES] | quit"
    )

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  DENTALCARE DASHBOARD - {title}{RESET}")
        print(f"{BOLD}  Clinic: {settings.clinic.name}{RESET}")
        print(f"{DIM}  Session: {self.session_id}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}[Doctor] {RESET}{step}")
            self._process_input(step)

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{scenario}' complete.{RESET}")
        print(f"{DIM}  Transitions: {len(self.workflow.get_history())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def run(self) -> None:
        self._banner("Console Demo")
        print(f"{DIM}{self.HELP}{RESET}")

        while True:
            user_input = input(f"\n{BLUE}[Doctor] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            self._process_input(user_input)

    def _process_input(self, text: str) -> None:
        command, _, arg = text.partition(" ")
        handlers: dict[str, Callable[[str], None]] = {
            "stats": self._handle_stats,
            "pending": self._handle_pending,
            "day": self._handle_day,
            "tab": self._handle_tab,
            "list": self._handle_list,
            "slots": self._handle_slots,
            "dates": self._handle_dates,
            "next": self._handle_next,
            "approve": self._handle_approve,
            "reject": self._handle_reject,
            "book": self._handle_book,
        }
        handler = handlers.get(command.lower())
        if handler is None:
            self.say(self.HELP)
            return
        try:
            handler(arg.strip())
        except (SchedulingError, ValueError) as exc:
            self.error(str(exc))

    # ------------------------------------------------------------------ #
    # Overview
    # ------------------------------------------------------------------ #

    def _handle_stats(self, _: str) -> None:
        stats = self.stats.calculate()
        self.say(
            f"Total appointments: {stats.total_appointments} "
            f"(+{stats.pending_appointments} pending approval)"
        )
        self.say(
            f"Approved: {stats.approved_appointments}  Rejected: {stats.rejected_appointments}  "
            f"Approval rate: {stats.approval_rate:.0%}"
        )
        for appointment in stats.upcoming:
            self.system_log(
                f"Upcoming: {appointment.patient_name} {appointment.date} at {appointment.time}"
            )
        for change in stats.recent_activity:
            self.system_log(
                f"Recent: {change.appointment_id} {change.from_status.value} -> "
                f"{change.to_status.value}"
            )

    def _handle_pending(self, _: str) -> None:
        queue = self.workflow.pending_queue()
        if not queue:
            self.say("No appointments awaiting approval.")
            return
        for appointment in queue:
            self._print_appointment(appointment)

    # ------------------------------------------------------------------ #
    # Calendar
    # ------------------------------------------------------------------ #

    def _handle_day(self, arg: str) -> None:
        self.calendar.select_date(date.fromisoformat(arg) if arg else self.store.today())
        self._handle_list("")

    def _handle_tab(self, arg: str) -> None:
        self.calendar.select_tab(arg or "all")
        self._handle_list("")

    def _handle_list(self, _: str) -> None:
        tab = self.calendar.active_tab
        tab_name = tab.value if isinstance(tab, AppointmentStatus) else tab
        self.system_log(f"{self.calendar.selected_date:%B %d, %Y} [{tab_name}]")
        appointments = self.calendar.appointments()
        if not appointments:
            self.say("No appointments for this date.")
        for appointment in appointments:
            self._print_appointment(appointment)

    def _print_appointment(self, appointment) -> None:
        color = STATUS_COLORS[appointment.status]
        print(
            f"  {appointment.id}  {appointment.date} {appointment.time:>8}  "
            f"{appointment.patient_name:<16} {color}{appointment.status.value}{RESET}"
            f"{DIM}  {appointment.notes or ''}{RESET}"
        )

    # ------------------------------------------------------------------ #
    # Availability
    # ------------------------------------------------------------------ #

    def _handle_slots(self, arg: str) -> None:
        day = date.fromisoformat(arg) if arg else self.calendar.selected_date
        report = self.calculator.compute_availability(day)
        if not report.slots:
            self.say(f"The clinic is closed on {day:%A}.")
        cells = [f"{SLOT_COLORS[s.status]}{s.label}{RESET}" for s in report.slots]
        print("  " + "  ".join(cells))
        self.system_log("Blue: Available | Gray: Booked | Yellow: Break time")
        for appointment in report.unscheduled:
            self.system_log(f"Unscheduled: {appointment.patient_name} at {appointment.time}")
        for appointment in report.conflicts:
            self.system_log(f"Double-booked: {appointment.patient_name} at {appointment.time}")

    def _handle_dates(self, _: str) -> None:
        for entry in self.calculator.get_available_dates():
            self.say(f"{entry['day_name']:<10} {entry['date']}  {entry['free_slots']} free")

    def _handle_next(self, _: str) -> None:
        found = self.calculator.find_next_available()
        if found is None:
            self.say("No free slots within the booking window.")
            return
        day, label = found
        self.say(f"Next available: {day:%A, %B %d} at {label}")

    # ------------------------------------------------------------------ #
    # Approval
    # ------------------------------------------------------------------ #

    def _resolve_id(self, arg: str) -> str:
        if arg == "first":
            queue = self.workflow.pending_queue()
            return queue[0].id if queue else ""
        if arg == "last-approved":
            approved = [
                c for c in self.workflow.get_history()
                if c.to_status == AppointmentStatus.APPROVED
            ]
            return approved[-1].appointment_id if approved else ""
        return arg

    def _handle_approve(self, arg: str) -> None:
        self.toast(self.calendar.approve(self._resolve_id(arg)))

    def _handle_reject(self, arg: str) -> None:
        self.toast(self.calendar.reject(self._resolve_id(arg)))

    # ------------------------------------------------------------------ #
    # Booking
    # ------------------------------------------------------------------ #

    def _handle_book(self, arg: str) -> None:
        parts = [p.strip() for p in arg.split("|")]
        if parts and parts[0] == "next":
            found = self.calculator.find_next_available()
            if found is None:
                self.say("No free slots within the booking window.")
                return
            parts = [found[0].isoformat(), found[1]] + parts[1:]
        fields = ["date", "time", "patient_name", "patient_email", "patient_phone", "notes"]
        request = dict(zip(fields, parts))
        result = self.booking.request_appointment(request)
        self.toast(result.notification)
        self.system_log(f"Created {result.appointment.id} ({result.appointment.status.value})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline dashboard console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(DashboardConsole.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument(
        "--no-seed", action="store_true", help="Start with an empty appointment book"
    )
    args = parser.parse_args()

    session = DashboardConsole(seed=not args.no_seed)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
