"""Appointment scheduling core for the DentalCare doctor dashboard."""

__version__ = "0.1.0"
