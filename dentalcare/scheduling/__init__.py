from dentalcare.scheduling.slot_generator import generate_slots, slots_for_date
from dentalcare.scheduling.availability import (
    AvailabilityCalculator,
    AvailabilityReport,
    SlotState,
)

__all__ = [
    "generate_slots",
    "slots_for_date",
    "AvailabilityCalculator",
    "AvailabilityReport",
    "SlotState",
]
