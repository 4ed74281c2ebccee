"""SleepSync: rule-based nap and bedtime planner."""

from sleepsync.services.nap_log_service import add_observed_nap, remove_observed_nap
from sleepsync.services.schedule_service import derive_schedule

__all__ = ["derive_schedule", "add_observed_nap", "remove_observed_nap"]
