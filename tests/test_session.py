"""
Tests for shooting phases, lanes, and session configuration.
"""
import textwrap
from pathlib import Path

import pytest

from shotscore.core import Point, TargetTemplate
from shotscore.target import get_template
from shotscore.session import (
    FiringMode,
    Lane,
    LaneDefaults,
    PhaseConfig,
    PhaseStateMachine,
    ShootingPhase,
    build_lane_defaults,
    build_phase_config,
    is_firing_mode_valid,
    load_session_settings,
    valid_firing_modes,
)


def test_initial_phase():
    """Test initial state is SELECT_BULLSEYE."""
    sm = PhaseStateMachine()
    assert sm.state == ShootingPhase.SELECT_BULLSEYE
    assert not sm.accepts_shots()


def test_untimed_flow():
    """Test untimed mode shoots until finished."""
    sm = PhaseStateMachine(PhaseConfig(firing_mode="untimed"))

    sm.bullseye_set(now=0.0)
    assert sm.state == ShootingPhase.SHOOTING
    assert sm.time_phase() is None

    # No window, never times out
    sm.update(now=1e9)
    assert sm.state == ShootingPhase.SHOOTING

    sm.finish()
    assert sm.state == ShootingPhase.DONE
    assert not sm.accepts_shots()


def test_timed_flow():
    """Test countdown, window and close for timed mode."""
    config = PhaseConfig(firing_mode="timed", countdown_sec=3.0, time_limit_sec=10.0)
    sm = PhaseStateMachine(config)

    sm.bullseye_set(now=100.0)
    assert sm.state == ShootingPhase.COUNTDOWN
    assert sm.accepts_shots()
    assert sm.time_phase() == "OUTSIDE"

    sm.update(now=102.0)
    assert sm.state == ShootingPhase.COUNTDOWN

    sm.update(now=103.0)
    assert sm.state == ShootingPhase.SHOOTING
    assert sm.time_phase() == "WINDOW"

    sm.update(now=112.9)
    assert sm.state == ShootingPhase.SHOOTING

    sm.update(now=113.0)
    assert sm.state == ShootingPhase.DONE
    assert sm.time_phase() == "OUTSIDE"


def test_timed_without_limit():
    """Test timed mode without a limit stays open."""
    sm = PhaseStateMachine(PhaseConfig(firing_mode="timed", countdown_sec=0.0))

    sm.bullseye_set(now=0.0)
    sm.update(now=0.0)
    assert sm.state == ShootingPhase.SHOOTING

    sm.update(now=1e6)
    assert sm.state == ShootingPhase.SHOOTING


def test_snap_window():
    """Test snap mode closes after the display time."""
    config = PhaseConfig(firing_mode="snap", countdown_sec=1.0, snap_display_sec=2.0, time_limit_sec=60.0)
    sm = PhaseStateMachine(config)

    sm.bullseye_set(now=0.0)
    sm.update(now=1.0)
    assert sm.state == ShootingPhase.SHOOTING

    sm.update(now=3.0)
    assert sm.state == ShootingPhase.DONE


def test_late_update_keeps_scheduled_window():
    """Test a late update starts and ends the window on schedule."""
    config = PhaseConfig(firing_mode="timed", countdown_sec=3.0, time_limit_sec=10.0)
    sm = PhaseStateMachine(config)
    sm.bullseye_set(now=0.0)

    # Countdown ended at 3.0; window runs 3.0 -> 13.0
    sm.update(now=5.0)
    assert sm.state == ShootingPhase.SHOOTING
    assert sm.state_start_time == 3.0

    sm.update(now=13.0)
    assert sm.state == ShootingPhase.DONE
    assert sm.state_start_time == 13.0


def test_single_late_update_closes_window():
    """Test one update past both timers moves straight to DONE."""
    config = PhaseConfig(firing_mode="snap", countdown_sec=1.0, snap_display_sec=2.0)
    sm = PhaseStateMachine(config)
    seen = []
    sm.on_transition(lambda old, new: seen.append(new))

    sm.bullseye_set(now=0.0)
    sm.update(now=60.0)

    assert sm.state == ShootingPhase.DONE
    assert seen == [ShootingPhase.COUNTDOWN, ShootingPhase.SHOOTING, ShootingPhase.DONE]
    assert sm.state_start_time == 3.0


def test_invalid_firing_mode():
    """Test unknown firing mode is rejected."""
    with pytest.raises(ValueError):
        PhaseConfig(firing_mode="moving")


def test_transition_listener():
    """Test transition callbacks receive old and new state."""
    sm = PhaseStateMachine()
    seen = []
    sm.on_transition(lambda old, new: seen.append((old, new)))

    sm.bullseye_set(now=0.0)
    sm.finish(now=1.0)

    assert seen == [
        (ShootingPhase.SELECT_BULLSEYE, ShootingPhase.SHOOTING),
        (ShootingPhase.SHOOTING, ShootingPhase.DONE),
    ]
    assert sm.state_transitions == 2


def test_phase_reset():
    """Test reset returns to bullseye selection."""
    sm = PhaseStateMachine()
    sm.bullseye_set()
    sm.finish()

    sm.reset()
    assert sm.state == ShootingPhase.SELECT_BULLSEYE


def test_firing_modes_per_session_type():
    """Test grouping and zeroing exclude snap."""
    assert valid_firing_modes("grouping") == [FiringMode.UNTIMED, FiringMode.TIMED]
    assert FiringMode.SNAP in valid_firing_modes("test")
    assert not is_firing_mode_valid("snap", "zeroing")
    assert is_firing_mode_valid("snap", "practice")


def test_lane_requires_bullseye():
    """Test shots are rejected before the bullseye is set."""
    lane = Lane("1", template=get_template("pistol-25m-precision"))
    assert lane.add_shot(200, 200) is None
    assert lane.shots == []


def test_lane_scores_fixture():
    """Test lane scoring for the nine-shot bullseye (110, 88) fixture."""
    lane = Lane("2", shooter="Cadet", template=TargetTemplate(diameter=120), esa=50)
    lane.set_bullseye(Point(110, 88))

    coords = [
        (150, 88), (70, 88), (110, 128), (110, 48),
        (130, 88), (90, 88), (110, 108),
        (115, 88), (105, 88),
    ]
    for x, y in coords:
        assert lane.add_shot(x, y) is not None

    stats = lane.stats()
    assert stats.shot_count == 9
    assert stats.zone_counts == {3: 5, 2: 4, 1: 0, 0: 0}
    assert stats.reference_point == "custom bullseye"
    assert [s.score for s in lane.shots] == [2, 2, 2, 2, 3, 3, 3, 3, 3]


def test_lane_default_bullseye_is_center():
    """Test set_bullseye without a point uses the target center."""
    lane = Lane("3")
    assert lane.set_bullseye() == Point(200.0, 200.0)

    lane.add_shot(200, 200)
    assert lane.stats().reference_point == "center"

    markers = [s for s in lane.all_shots() if s.is_bullseye]
    assert len(markers) == 1
    assert (markers[0].x, markers[0].y) == (200.0, 200.0)


def test_lane_duplicate_suppression():
    """Test shots within 3px on both axes are ignored."""
    lane = Lane("4")
    lane.set_bullseye()

    assert lane.add_shot(200, 200) is not None
    assert lane.add_shot(202, 201) is None
    assert lane.add_shot(203, 200) is not None
    assert len(lane.shots) == 2


def test_lane_rescores_on_template_change():
    """Test changing the template rescores stored shots."""
    lane = Lane("5", template=TargetTemplate(diameter=120))
    lane.set_bullseye()
    shot = lane.add_shot(260, 200)  # 60px from center
    assert shot.score == 2

    lane.template = None  # 50px fallback ring
    assert shot.score == 0

    lane.esa = 96
    assert lane.ring_radii.orange_radius == pytest.approx(50 * 0.85)


def test_lane_undo_and_clear():
    """Test undo and clear."""
    lane = Lane("6")
    lane.set_bullseye()
    lane.add_shot(200, 200)
    lane.add_shot(220, 200)

    undone = lane.undo_last_shot()
    assert undone.x == 220
    assert len(lane.shots) == 1

    lane.clear_shots()
    assert lane.undo_last_shot() is None


def test_timed_lane_counts_window_shots_only():
    """Test early shots are tagged and excluded once the window is used."""
    config = PhaseConfig(firing_mode="timed", countdown_sec=3.0, time_limit_sec=10.0)
    lane = Lane("7", template=TargetTemplate(diameter=120), phase_config=config)
    finished = []
    lane.on_stats(lambda ln, stats: finished.append(stats))

    lane.set_bullseye(now=0.0)
    early = lane.add_shot(20, 20)
    assert early.time_phase == "OUTSIDE"

    lane.update(now=3.0)
    inside = lane.add_shot(200, 200)
    assert inside.time_phase == "WINDOW"
    lane.add_shot(205, 200)

    lane.update(now=13.0)
    assert lane.phase.state == ShootingPhase.DONE
    assert lane.add_shot(210, 210) is None

    assert len(finished) == 1
    assert lane.final_stats.shot_count == 2
    assert lane.final_stats.accuracy == pytest.approx(100.0)
    assert lane.finish() is lane.final_stats


def test_lane_report():
    """Test lane report uses final stats and session type."""
    lane = Lane("8", shooter="Cadet", template=TargetTemplate(diameter=120), session_type="test")
    lane.set_bullseye()
    lane.add_shot(200, 200)
    lane.add_shot(380, 380)
    lane.finish()

    report = lane.report()
    assert report["lane_id"] == "8"
    assert report["stats"]["total_score"] == 3
    assert report["stats"]["accuracy"] == pytest.approx(50.0)
    assert report["remark"]["rating"] == "SECOND CLASS"


def test_done_lane_keeps_shots_and_stats_in_sync():
    """Test undo, clear and bullseye changes are ignored once done."""
    lane = Lane("10", template=TargetTemplate(diameter=120))
    lane.set_bullseye()
    lane.add_shot(200, 200)
    lane.add_shot(220, 200)
    lane.finish()

    assert lane.undo_last_shot() is None
    lane.clear_shots()
    assert lane.set_bullseye(Point(100, 100)) == Point(200.0, 200.0)

    report = lane.report()
    assert len(report["shots"]) == 2
    assert report["stats"]["shot_count"] == 2
    assert report["stats"]["reference_point"] == "center"


def test_done_lane_template_change_refreshes_stats():
    """Test rescoring after done also refreshes the final stats."""
    lane = Lane("11", template=TargetTemplate(diameter=120))
    lane.set_bullseye()
    lane.add_shot(260, 200)  # 60px from center
    final = lane.finish()
    assert final.total_score == 2

    lane.template = None  # 50px fallback ring
    assert lane.final_stats.total_score == 0
    assert lane.report()["stats"]["total_score"] == 0


def test_lane_reset():
    """Test reset clears shots and bullseye."""
    lane = Lane("9")
    lane.set_bullseye()
    lane.add_shot(200, 200)
    lane.reset()

    assert lane.shots == []
    assert lane.bullseye is None
    assert lane.phase.state == ShootingPhase.SELECT_BULLSEYE
    assert lane.add_shot(200, 200) is None


def test_load_session_settings_missing_file(tmp_path: Path):
    """Missing YAML should fall back to defaults without error."""
    settings = load_session_settings(tmp_path / "no_config.yaml")
    assert settings == {}

    phase_config = build_phase_config(settings)
    assert phase_config.firing_mode == "untimed"
    assert build_lane_defaults(settings) == LaneDefaults()


def test_build_configs_apply_overrides(tmp_path: Path):
    """Overrides from YAML should populate phase and lane configs."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(textwrap.dedent("""
        phase:
          firing_mode: timed
          countdown_sec: 5
          time_limit_sec: 30
          unknown_key: 1
        lane:
          session_type: test
          template_id: rifle-50m
          esa: 48
    """).strip())

    settings = load_session_settings(config_path)
    phase_config = build_phase_config(settings)
    defaults = build_lane_defaults(settings)

    assert phase_config.firing_mode == "timed"
    assert phase_config.countdown_sec == 5
    assert phase_config.window_sec == 30
    assert not hasattr(phase_config, "unknown_key")
    assert defaults.session_type == "test"
    assert defaults.esa == 48
    assert defaults.resolve_template().diameter == 100


def test_invalid_firing_mode_in_config():
    """Test a bad firing mode in settings raises."""
    with pytest.raises(ValueError):
        build_phase_config({"phase": {"firing_mode": "moving"}})


def test_lane_defaults_distance_template():
    """Test distance-based template when no id is set."""
    defaults = LaneDefaults(target_distance_m=75)
    assert defaults.resolve_template().diameter == 105.0

    assert LaneDefaults(template_id="missing").resolve_template() is None
    assert LaneDefaults().resolve_template() is None


def test_malformed_config_falls_back(tmp_path: Path):
    """Test malformed YAML returns empty settings."""
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("phase: [unclosed")

    assert load_session_settings(config_path) == {}
