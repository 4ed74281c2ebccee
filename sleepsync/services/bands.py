"""Evidence-based age bands and wake-window interpolation."""

from sleepsync.models.band import AgeBand, ClockBand, HybridBand, WindowBand
from sleepsync.services.clock import round_half_up


# ─── Knowledge table ──────────────────────────────────────────────────────────
# Ordered by range_end. The last band is open-ended: any older age maps to it.

SLEEP_STANDARDS: tuple[AgeBand, ...] = (
    WindowBand(
        key="0-3",
        label="Newborn (0–3 months)",
        range_start=0,
        range_end=3,
        min_wake=45,
        max_wake=90,
        naps=4,
        bedtime_window=90,
        too_long_nap_minutes=150,
        latest_nap_end_time="18:00",
        ideal_bedtime="20:00",
        description=(
            "There is no stable day-night rhythm yet. Sleep pressure builds up "
            "very quickly, so short wake phases and several sleep episodes spread "
            "across the day are physiologically normal."
        ),
    ),
    WindowBand(
        key="4-6",
        label="Infant (4–6 months)",
        range_start=4,
        range_end=6,
        min_wake=90,
        max_wake=150,
        naps=3,
        bedtime_window=150,
        too_long_nap_minutes=150,
        latest_nap_end_time="17:30",
        ideal_bedtime="19:30",
        description=(
            "Sleep becomes increasingly cyclical and wake windows are the main "
            "lever. Short naps are age-appropriate and often call for an earlier "
            "next sleep opportunity."
        ),
    ),
    HybridBand(
        key="7-12",
        label="Baby (7–12 months)",
        range_start=7,
        range_end=12,
        min_wake=150,
        max_wake=210,
        naps=2,
        bedtime_window=210,
        too_long_nap_minutes=150,
        latest_nap_end_time="16:30",
        ideal_bedtime="19:30",
        description=(
            "The circadian rhythm keeps stabilising and the move to two naps "
            "happens gradually. The last wake phase of the day is usually the "
            "longest and the most sensitive to overtiredness."
        ),
    ),
    HybridBand(
        key="13-18",
        label="Toddler (13–18 months)",
        range_start=13,
        range_end=18,
        min_wake=210,
        max_wake=300,
        naps=1,
        bedtime_window=270,
        too_long_nap_minutes=150,
        latest_nap_end_time="15:30",
        ideal_bedtime="19:30",
        description=(
            "Transition to a single midday nap. Switching too early can lead to "
            "overtiredness, showing up as early waking, frequent night waking or "
            "shorter night sleep."
        ),
    ),
    ClockBand(
        key="19-36",
        label="Toddler (2–3 years)",
        range_start=19,
        range_end=36,
        min_wake=300,
        max_wake=360,
        naps=1,
        bedtime_window=330,
        too_long_nap_minutes=150,
        latest_nap_end_time="15:30",
        ideal_bedtime="19:30",
        description=(
            "The day is mostly shaped by fixed clock times. The main levers are a "
            "consistent midday nap and deliberately limiting daytime sleep (nap "
            "capping) to reliably protect an age-appropriate bedtime."
        ),
    ),
    ClockBand(
        key="36+",
        label="Preschooler (3–5 years)",
        range_start=37,
        range_end=60,
        min_wake=360,
        max_wake=720,
        naps=0,
        bedtime_window=720,
        too_long_nap_minutes=120,
        latest_nap_end_time="15:00",
        ideal_bedtime="20:00",
        description=(
            "The midday nap is increasingly dropped. A reliable daily structure "
            "with a calm evening routine and a consistent bedtime usually works "
            "better than forcing a daytime nap."
        ),
    ),
)


def all_bands() -> list[AgeBand]:
    """Return the age bands in ascending order."""
    return list(SLEEP_STANDARDS)


def resolve_band(months: int) -> AgeBand:
    """Return the first band whose upper bound is >= months."""
    for band in SLEEP_STANDARDS:
        if months <= band.range_end:
            return band
    return SLEEP_STANDARDS[-1]


def band_progress(months: int, band: AgeBand) -> float:
    """How far through the band's age range the child is, from 0.0 to 1.0."""
    if band.range_start == band.range_end:
        return 1.0
    progress = (months - band.range_start) / (band.range_end - band.range_start)
    return min(1.0, max(0.0, progress))


def interpolated_wake_window(months: int, band: AgeBand) -> int:
    """Wake window in minutes, linear between the band's min and max."""
    if band.range_start == band.range_end:
        return band.max_wake
    progress = band_progress(months, band)
    return round_half_up(band.min_wake + (band.max_wake - band.min_wake) * progress)
