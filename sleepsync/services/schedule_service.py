"""Rest-of-day schedule derivation.

Pure functions only: the same (age, wake time, observed naps) always yields the
same events and warnings. Times are tracked internally as minutes since the
morning's midnight, so a bedtime past 24:00 still compares as "late".
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Optional

from sleepsync.models.band import AgeBand
from sleepsync.models.nap import NapWindow
from sleepsync.models.schedule import DerivationResult, PlannedEvent, Severity
from sleepsync.services.bands import band_progress, interpolated_wake_window, resolve_band
from sleepsync.services.clock import (
    duration_between,
    format_hours,
    minutes_to_time,
    round_half_up,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

SHORT_NAP_MINUTES = 45          # below this a sleep cycle was likely not completed
SHORT_NAP_WAKE_FACTOR = 0.8     # next wake window after a short nap
WAKE_WINDOW_STEP = 15           # widening per predicted nap, capped at band.max_wake
STANDARD_NAP_MINUTES = 90
CATNAP_MINUTES = 30             # last nap of a multi-nap day
CAPPING_LEAD_MINUTES = 30       # ceiling this far before the anchor -> cap instead
EARLY_WAKE_BEFORE = 6 * 60
EARLY_BEDTIME_BEFORE = 18 * 60
LATE_BEDTIME_AFTER = 21 * 60
BEDTIME_AGE_SPREAD = 30         # bedtime window ranges over ±15 min across a band
WARNING_BEDTIME_FACTOR = 0.9
TARGET_BEDTIME_RANGE = 30

_SEVERITY_RANK = {"normal": 0, "warning": 1, "critical": 2}


# ─── Accumulator ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DayState:
    """Everything the walk through the day carries from one step to the next."""
    cursor: int                          # end of the latest sleep, minutes
    wake_window: int                     # wake window for the next predicted nap
    events: tuple[PlannedEvent, ...] = ()
    warnings: tuple[str, ...] = ()
    naps_taken: int = 0
    last_nap_short: bool = False
    last_nap_capped: bool = False
    last_nap_severity: Optional[Severity] = None

    def warn(self, message: str) -> "DayState":
        return replace(self, warnings=self.warnings + (message,))


@dataclass(frozen=True)
class NapPlan:
    """A nap placement chosen by one of the strategies below."""
    start: int
    duration: int
    reasoning: str
    severity: Severity = "normal"
    capped: bool = False
    warning: Optional[str] = None


# ─── Observed naps ────────────────────────────────────────────────────────────

def classify_nap(duration: int, band: AgeBand) -> tuple[str, str, Severity]:
    """Return (label, reasoning, severity) for a nap that already happened."""
    if duration < SHORT_NAP_MINUTES:
        return (
            "short",
            "Short nap: a sleep cycle was probably not completed. Sleep pressure "
            "was only partly released, so plan the next wake window a bit shorter.",
            "warning",
        )
    if duration > band.too_long_nap_minutes:
        return (
            "very long",
            "Very long daytime sleep can reduce sleep pressure for the night "
            "(\"sleep pressure stealing\"). That can lead to a late bedtime, "
            "night waking or early rising.",
            "warning",
        )
    return (
        "restorative",
        "Good nap length: supports recovery and stability without cutting into "
        "night sleep.",
        "normal",
    )


def _record_observed_nap(state: DayState, nap: NapWindow, band: AgeBand) -> DayState:
    number = state.naps_taken + 1
    start = time_to_minutes(nap.start)
    duration = duration_between(nap.start, nap.end)
    label, reasoning, severity = classify_nap(duration, band)

    event = PlannedEvent(
        kind="nap",
        start=minutes_to_time(start),
        end=minutes_to_time(start + duration),
        title=f"Nap {number}",
        description=f"{duration} min, {label}.",
        reasoning=reasoning,
        is_prediction=False,
        severity=severity,
    )
    return replace(
        state,
        cursor=start + duration,
        events=state.events + (event,),
        naps_taken=number,
        last_nap_short=label == "short",
        last_nap_capped=False,
        last_nap_severity=severity,
    )


# ─── Nap strategies ───────────────────────────────────────────────────────────

NapStrategy = Callable[[DayState, AgeBand, int, int], NapPlan]


def capped_early_nap(state: DayState, band: AgeBand, age_months: int, number: int) -> NapPlan:
    """Put the nap at the wake-window ceiling and cut it short."""
    start = state.cursor + band.max_wake
    duration = band.capped_nap_minutes
    start_label = minutes_to_time(start)
    return NapPlan(
        start=start,
        duration=duration,
        reasoning=(
            f"After the early start the maximum wake window of "
            f"{format_hours(band.max_wake)} h is reached at {start_label}, well "
            f"before the usual midday nap at {band.nap_anchor}. Put the child down "
            f"at {start_label} and wake the child after {duration} min (nap capping) "
            f"so enough sleep pressure builds up again for bedtime."
        ),
        severity="warning",
        capped=True,
        warning=(
            f"Early start: the midday nap moves forward to {start_label} and is "
            f"capped at {duration} min to protect bedtime."
        ),
    )


def clock_anchored_nap(state: DayState, band: AgeBand, age_months: int, number: int) -> NapPlan:
    """Midday nap by the clock, never past the wake-window ceiling."""
    earliest = state.cursor + band.min_wake
    ceiling = state.cursor + band.max_wake
    start = min(max(earliest, time_to_minutes(band.nap_anchor)), ceiling)
    return NapPlan(
        start=start,
        duration=STANDARD_NAP_MINUTES,
        reasoning=(
            "In clock mode the midday nap is planned by the clock to stabilise "
            f"the internal clock (anchor {band.nap_anchor}, at most "
            f"{format_hours(band.max_wake)} h after waking)."
        ),
    )


def wake_window_nap(state: DayState, band: AgeBand, age_months: int, number: int) -> NapPlan:
    """Next nap after the wake window currently in effect."""
    is_last = number == band.naps
    duration = CATNAP_MINUTES if band.naps > 1 and is_last else STANDARD_NAP_MINUTES
    return NapPlan(
        start=state.cursor + state.wake_window,
        duration=duration,
        reasoning=(
            f"Guide value for {age_months} months: wake window of about "
            f"{format_hours(state.wake_window)} h."
        ),
    )


def select_nap_strategy(band: AgeBand, observed_count: int, state: DayState) -> NapStrategy:
    """Pick how the next nap is placed from band mode, nap count and progress."""
    if band.mode == "clock" and band.naps == 1 and observed_count == 0:
        ceiling = state.cursor + band.max_wake
        if time_to_minutes(band.nap_anchor) - ceiling >= CAPPING_LEAD_MINUTES:
            return capped_early_nap
        return clock_anchored_nap
    return wake_window_nap


def _place_predicted_nap(
    state: DayState, plan: NapPlan, band: AgeBand, number: int
) -> DayState:
    end = plan.start + plan.duration
    severity = plan.severity
    if plan.warning:
        state = state.warn(plan.warning)

    if end > time_to_minutes(band.latest_nap_end_time):
        state = state.warn(
            f"Nap {number} would probably end late (after {band.latest_nap_end_time}). "
            f"That can push bedtime back noticeably; start it earlier or shorten it "
            f"(nap capping)."
        )
        if _SEVERITY_RANK[severity] < _SEVERITY_RANK["warning"]:
            severity = "warning"

    if plan.capped:
        title = f"Suggested nap {number} (capped)"
        description = f"Wake the child after {plan.duration} min."
    else:
        title = f"Suggested nap {number}"
        description = f"Expected duration: about {plan.duration} min."

    event = PlannedEvent(
        kind="nap",
        start=minutes_to_time(plan.start),
        end=minutes_to_time(end),
        title=title,
        description=description,
        reasoning=plan.reasoning,
        is_prediction=True,
        severity=severity,
    )
    return replace(
        state,
        cursor=end,
        wake_window=min(band.max_wake, state.wake_window + WAKE_WINDOW_STEP),
        events=state.events + (event,),
        naps_taken=number,
        last_nap_short=False,
        last_nap_capped=plan.capped,
        last_nap_severity=severity,
    )


# ─── Bedtime ──────────────────────────────────────────────────────────────────

def bedtime_wake_window(band: AgeBand, age_months: int, state: DayState) -> int:
    """Wake time between the last sleep and bed, in minutes."""
    if state.last_nap_capped:
        return band.max_wake
    window = band.bedtime_window
    if band.mode != "clock":
        progress = band_progress(age_months, band)
        window = round_half_up(window - BEDTIME_AGE_SPREAD / 2 + BEDTIME_AGE_SPREAD * progress)
    if state.last_nap_severity in ("warning", "critical"):
        window = round_half_up(window * WARNING_BEDTIME_FACTOR)
    return window


def _bedtime_event(state: DayState, window: int) -> PlannedEvent:
    bedtime = state.cursor + window
    start = minutes_to_time(bedtime)
    reasoning = f"Calculated as end of the last sleep + {format_hours(window)} h of wake time."

    if bedtime < EARLY_BEDTIME_BEFORE:
        severity: Severity = "warning"
        description = "Early bedtime to make up for an early start (prevents overtiredness)."
        reasoning += (
            "\nThe calculated bedtime is very early. After a short day, around "
            "18:00 is often a sensible anchor."
        )
    elif bedtime > LATE_BEDTIME_AFTER:
        severity = "critical"
        description = "Late bedtime: risk of overtiredness."
        reasoning += (
            "\nFalling asleep very late raises the risk of a \"second wind\" "
            "(stress activation), which makes it harder to settle."
        )
    else:
        severity = "normal"
        description = "Start of the night."

    title = "Bedtime"
    if state.last_nap_capped:
        until = minutes_to_time(bedtime + TARGET_BEDTIME_RANGE)
        title = "Target bedtime"
        description = f"Aim for lights out between {start} and {until}. " + description
        reasoning = (
            f"The capped nap keeps {format_hours(window)} h of wake time before bed, "
            f"which lands bedtime between {start} and {until}.\n" + reasoning
        )

    return PlannedEvent(
        kind="bedtime",
        start=start,
        title=title,
        description=description,
        reasoning=reasoning,
        is_prediction=True,
        severity=severity,
    )


# ─── Entry point ──────────────────────────────────────────────────────────────

def derive_schedule(
    age_months: int,
    wake_time: str,
    observed_naps: Sequence[NapWindow] = (),
) -> DerivationResult:
    """Derive the rest of the day from age, wake-up time and naps so far."""
    band = resolve_band(age_months)
    wake_window = interpolated_wake_window(age_months, band)
    wake = time_to_minutes(wake_time)

    state = DayState(cursor=wake, wake_window=wake_window)
    state = replace(state, events=(
        PlannedEvent(
            kind="wake",
            start=minutes_to_time(wake),
            title="Start of the day",
            description="Start of the wake phase (sleep pressure builds up).",
            reasoning=(
                "Morning daylight, breakfast and movement help synchronise the "
                "internal clock.\nThis is especially helpful after very early waking."
            ),
            is_prediction=False,
        ),
    ))

    if wake < EARLY_WAKE_BEFORE:
        state = state.warn(
            "Very early waking (before 06:00): the day rhythm may shift earlier. "
            "Early-wake mitigation is in effect; lean towards pushing the first "
            "nap back slightly."
        )

    for nap in sorted(observed_naps, key=lambda n: time_to_minutes(n.start)):
        state = _record_observed_nap(state, nap, band)

    observed_count = state.naps_taken
    remaining = max(0, band.naps - observed_count)

    if state.last_nap_short and remaining > 0:
        shortened = round_half_up(state.wake_window * SHORT_NAP_WAKE_FACTOR)
        state = replace(state, wake_window=shortened).warn(
            f"Nap {observed_count} was short. The next wake window is shortened to "
            f"about {format_hours(shortened)} h."
        )

    for number in range(observed_count + 1, observed_count + remaining + 1):
        strategy = select_nap_strategy(band, observed_count, state)
        plan = strategy(state, band, age_months, number)
        state = _place_predicted_nap(state, plan, band, number)

    window = bedtime_wake_window(band, age_months, state)

    if observed_count and not remaining:
        if state.cursor + window > time_to_minutes(band.ideal_bedtime):
            state = state.warn(
                f"The last nap ends late relative to the target bedtime "
                f"({band.ideal_bedtime}). That can push bedtime back; end the nap "
                f"earlier or shorten it (nap capping)."
            )

    events = state.events + (_bedtime_event(state, window),)
    logger.debug(
        "Derived %d events, %d warnings for %d months (band %s)",
        len(events), len(state.warnings), age_months, band.key,
    )
    return DerivationResult(
        events=list(events),
        warnings=list(state.warnings),
        band=band,
        wake_window_minutes=wake_window,
    )
