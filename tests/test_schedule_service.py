"""Unit tests for the rest-of-day derivation."""

from sleepsync.models.nap import NapWindow
from sleepsync.services.bands import resolve_band
from sleepsync.services.schedule_service import (
    DayState,
    bedtime_wake_window,
    capped_early_nap,
    classify_nap,
    clock_anchored_nap,
    derive_schedule,
    select_nap_strategy,
    wake_window_nap,
)


def _predicted_naps(result):
    return [e for e in result.events if e.kind == "nap" and e.is_prediction]


def _bedtime(result):
    assert result.events[-1].kind == "bedtime"
    return result.events[-1]


# ─── Wake event & early start ─────────────────────────────────────────────────

def test_wake_event_first():
    result = derive_schedule(5, "07:00")
    wake = result.events[0]
    assert wake.kind == "wake"
    assert wake.start == "07:00"
    assert wake.is_prediction is False
    assert result.warnings == []


def test_early_wake_warning():
    result = derive_schedule(5, "05:45")
    assert "06:00" in result.warnings[0]


def test_wake_at_six_is_not_early():
    result = derive_schedule(5, "06:00")
    assert not any("early waking" in w for w in result.warnings)


# ─── Early-start toddler: capped nap ──────────────────────────────────────────

def test_toddler_early_start_caps_nap():
    result = derive_schedule(24, "05:00")
    kinds = [e.kind for e in result.events]
    assert kinds == ["wake", "nap", "bedtime"]

    nap = result.events[1]
    assert nap.start == "11:00"  # 05:00 + 6 h max wake window
    assert nap.end == "12:15"    # capped at 75 min
    assert nap.severity == "warning"
    assert nap.is_prediction is True
    assert "wake the child" in nap.reasoning
    assert any("capped" in w for w in result.warnings)


def test_toddler_capped_nap_sets_target_bedtime():
    bedtime = _bedtime(derive_schedule(24, "05:00"))
    assert bedtime.start == "18:15"  # 12:15 + 360 min
    assert bedtime.title == "Target bedtime"
    assert "18:15" in bedtime.description
    assert "18:45" in bedtime.description
    assert bedtime.severity == "normal"
    assert "6.0 h" in bedtime.reasoning


def test_toddler_regular_start_uses_clock_anchor():
    result = derive_schedule(24, "07:00")
    nap = _predicted_naps(result)[0]
    assert nap.start == "12:30"
    assert nap.end == "14:00"
    assert nap.severity == "normal"

    bedtime = _bedtime(result)
    assert bedtime.title == "Bedtime"
    assert bedtime.start == "19:30"  # clock bands keep the base 5.5 h window
    assert bedtime.severity == "normal"
    assert not any("capped" in w for w in result.warnings)


def test_toddler_anchor_bounded_by_wake_ceiling():
    # ceiling 12:30 equals the anchor: no capping, nap at the anchor
    nap = _predicted_naps(derive_schedule(24, "06:30"))[0]
    assert nap.start == "12:30"
    assert nap.severity == "normal"


def test_toddler_late_start_waits_for_min_wake():
    # 08:00 + 5 h minimum wake window is later than the 12:30 anchor
    result = derive_schedule(24, "08:00")
    nap = _predicted_naps(result)[0]
    assert nap.start == "13:00"
    assert nap.end == "14:30"
    assert nap.severity == "normal"
    assert _bedtime(result).start == "20:00"


def test_toddler_ceiling_trims_anchor_without_capping():
    # ceiling 12:10 falls only 20 min before the anchor: no capping
    result = derive_schedule(24, "06:10")
    nap = _predicted_naps(result)[0]
    assert nap.start == "12:10"
    assert nap.end == "13:40"
    assert nap.severity == "normal"
    assert not any("capped" in w for w in result.warnings)


def test_toddler_capping_threshold():
    # ceiling 12:00 is exactly 30 min before the anchor
    nap = _predicted_naps(derive_schedule(24, "06:00"))[0]
    assert nap.start == "12:00"
    assert nap.end == "13:15"
    assert nap.severity == "warning"


def test_toddler_after_observed_nap_no_prediction():
    result = derive_schedule(24, "07:00", [NapWindow(start="12:30", end="14:00")])
    assert _predicted_naps(result) == []
    assert _bedtime(result).start == "19:30"


# ─── Newborn: pure wake-window mode ───────────────────────────────────────────

def test_newborn_four_naps_by_wake_window():
    result = derive_schedule(2, "08:00")
    assert result.band.naps == 4
    assert result.band.mode == "window"
    assert result.wake_window_minutes == 75

    naps = _predicted_naps(result)
    assert [n.start for n in naps] == ["09:15", "12:15", "15:15", "18:15"]
    # widened by 15 min after the first nap, then capped at the 90 min maximum
    assert [n.end for n in naps] == ["10:45", "13:45", "16:45", "18:45"]
    assert naps[-1].description == "Expected duration: about 30 min."
    assert all("wake window" in n.reasoning for n in naps)


def test_newborn_last_nap_past_latest_end_warns():
    result = derive_schedule(2, "08:00")
    last = _predicted_naps(result)[-1]
    assert last.severity == "warning"
    assert any("after 18:00" in w for w in result.warnings)


# ─── Observed naps ────────────────────────────────────────────────────────────

def test_classify_nap():
    band = resolve_band(5)
    assert classify_nap(20, band)[0] == "short"
    assert classify_nap(20, band)[2] == "warning"
    assert classify_nap(45, band)[0] == "restorative"
    assert classify_nap(150, band)[2] == "normal"
    assert classify_nap(151, band)[0] == "very long"
    assert "night" in classify_nap(151, band)[1]


def test_short_nap_shrinks_next_wake_window(short_morning_nap):
    result = derive_schedule(5, "07:00", short_morning_nap)

    observed = result.events[1]
    assert observed.is_prediction is False
    assert observed.severity == "warning"
    assert "short" in observed.description

    next_nap = _predicted_naps(result)[0]
    assert next_nap.start == "10:56"  # 09:20 + 0.8 × 120 min
    assert any("Nap 1 was short" in w for w in result.warnings)


def test_adequate_nap_keeps_wake_window():
    result = derive_schedule(5, "07:00", [NapWindow(start="09:00", end="10:00")])
    assert result.events[1].severity == "normal"
    assert _predicted_naps(result)[0].start == "12:00"
    assert result.warnings == []


def test_observed_naps_sorted_by_start():
    naps = [NapWindow(start="13:00", end="14:00"), NapWindow(start="09:30", end="11:00")]
    result = derive_schedule(10, "07:00", naps)
    observed = [e for e in result.events if e.kind == "nap" and not e.is_prediction]
    assert [e.start for e in observed] == ["09:30", "13:00"]
    assert [e.title for e in observed] == ["Nap 1", "Nap 2"]
    assert _predicted_naps(result) == []


def test_hybrid_one_observed_nap():
    result = derive_schedule(10, "07:00", [NapWindow(start="09:30", end="11:00")])
    nap = _predicted_naps(result)[0]
    assert nap.start == "14:06"  # 11:00 + 186 min
    assert nap.end == "14:36"    # last of two naps: catnap
    assert nap.title == "Suggested nap 2"

    bedtime = _bedtime(result)
    assert bedtime.start == "18:09"  # 14:36 + (210 - 15 + 0.6 × 30) min
    assert bedtime.severity == "normal"


def test_more_observed_naps_than_band_targets():
    naps = [
        NapWindow(start="09:00", end="10:00"),
        NapWindow(start="12:00", end="13:00"),
        NapWindow(start="15:00", end="15:45"),
    ]
    result = derive_schedule(10, "07:00", naps)
    assert _predicted_naps(result) == []
    assert len(result.events) == 5


def test_long_nap_preschooler():
    result = derive_schedule(40, "07:00", [NapWindow(start="12:00", end="14:30")])
    observed = result.events[1]
    assert observed.severity == "warning"
    assert "very long" in observed.description
    assert any("20:00" in w for w in result.warnings)
    assert _bedtime(result).severity == "critical"


# ─── Late nap & bedtime classification ────────────────────────────────────────

def test_late_predicted_nap_warns():
    result = derive_schedule(5, "10:00")
    naps = _predicted_naps(result)
    assert [n.start for n in naps] == ["12:00", "15:45", "19:45"]
    assert naps[1].severity == "normal"
    assert naps[2].severity == "warning"
    assert naps[2].end == "20:15"
    assert any("Nap 3" in w and "17:30" in w and "bedtime" in w for w in result.warnings)

    bedtime = _bedtime(result)
    assert bedtime.start == "22:30"  # 20:15 + 0.9 × 150 min
    assert bedtime.severity == "critical"


def test_early_bedtime_flagged():
    result = derive_schedule(40, "05:00")
    assert _predicted_naps(result) == []
    bedtime = _bedtime(result)
    assert bedtime.start == "17:00"
    assert bedtime.severity == "warning"
    assert "early" in bedtime.description.lower()


def test_bedtime_reasoning_states_hours():
    bedtime = _bedtime(derive_schedule(24, "07:00"))
    assert "5.5 h" in bedtime.reasoning


# ─── Strategies ───────────────────────────────────────────────────────────────

def test_select_nap_strategy():
    toddler = resolve_band(24)
    assert select_nap_strategy(toddler, 0, DayState(cursor=300, wake_window=318)) is capped_early_nap
    assert select_nap_strategy(toddler, 0, DayState(cursor=420, wake_window=318)) is clock_anchored_nap
    assert select_nap_strategy(resolve_band(2), 0, DayState(cursor=480, wake_window=75)) is wake_window_nap
    assert select_nap_strategy(resolve_band(15), 0, DayState(cursor=300, wake_window=255)) is wake_window_nap


def test_wake_window_nap_plan():
    plan = wake_window_nap(DayState(cursor=480, wake_window=120), resolve_band(5), 5, 1)
    assert plan.start == 600
    assert plan.duration == 90
    assert plan.severity == "normal"
    assert "2.0 h" in plan.reasoning


def test_bedtime_wake_window_variants():
    band = resolve_band(5)
    assert bedtime_wake_window(band, 4, DayState(cursor=0, wake_window=90)) == 135
    assert bedtime_wake_window(band, 6, DayState(cursor=0, wake_window=150)) == 165
    shrunk = DayState(cursor=0, wake_window=120, last_nap_severity="warning")
    assert bedtime_wake_window(band, 5, shrunk) == 135
    capped = DayState(cursor=0, wake_window=318, last_nap_capped=True)
    assert bedtime_wake_window(resolve_band(24), 24, capped) == 360


def test_bedtime_wake_window_rounds_half_up():
    # 85 min × 0.9 = 76.5
    shrunk = DayState(cursor=0, wake_window=60, last_nap_severity="warning")
    assert bedtime_wake_window(resolve_band(1), 1, shrunk) == 77


# ─── Purity ───────────────────────────────────────────────────────────────────

def test_derivation_is_idempotent(short_morning_nap):
    first = derive_schedule(5, "07:00", short_morning_nap)
    second = derive_schedule(5, "07:00", short_morning_nap)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_input_list_not_modified():
    naps = [NapWindow(start="13:00", end="14:00"), NapWindow(start="09:30", end="11:00")]
    derive_schedule(10, "07:00", naps)
    assert [n.start for n in naps] == ["13:00", "09:30"]
