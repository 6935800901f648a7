from dentalcare.dashboard.calendar_view import CalendarView
from dentalcare.dashboard.stats import DashboardStats, StatsCalculator

__all__ = ["CalendarView", "DashboardStats", "StatsCalculator"]
