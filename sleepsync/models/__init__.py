from .band import AgeBand, ClockBand, HybridBand, WindowBand
from .nap import NapCreate, NapWindow, ObservedNap
from .schedule import BandLookup, DerivationResult, PlannedEvent, ScheduleRequest

__all__ = [
    "AgeBand", "ClockBand", "HybridBand", "WindowBand",
    "NapCreate", "NapWindow", "ObservedNap",
    "BandLookup", "DerivationResult", "PlannedEvent", "ScheduleRequest",
]
