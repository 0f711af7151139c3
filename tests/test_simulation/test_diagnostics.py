"""Tests for MatchLogger and the kick scenario runner."""

import json

import pytest

from goalkick.simulation.core.entities import BallState
from goalkick.simulation.core.vec3 import Vec3
from goalkick.simulation.resolution.kick import AimCandidate
from goalkick.simulation.testing.logger import MatchLogger
from goalkick.simulation.testing.scenario import (
    PENALTY_CENTER,
    SCENARIOS,
    KickScenario,
    ScriptedRandom,
    penalty_random,
    run_all,
    run_scenario,
)


class TestScriptedRandom:
    def test_always_picks_aim(self):
        rng = ScriptedRandom(AimCandidate.RIGHT)
        assert rng.choice(list(AimCandidate)) == AimCandidate.RIGHT

    def test_unknown_aim_rejected(self):
        rng = ScriptedRandom(AimCandidate.RIGHT)
        with pytest.raises(ValueError):
            rng.choice([AimCandidate.CENTER])

    def test_jitter_clamped(self):
        rng = ScriptedRandom(jitter=2.0)
        assert rng.uniform(-0.5, 0.5) == 0.5
        assert ScriptedRandom(jitter=-2.0).uniform(-0.5, 0.5) == -0.5
        assert ScriptedRandom(jitter=0.1).uniform(-0.5, 0.5) == 0.1


class TestMatchLogger:
    """Tests for tick-by-tick recording."""

    def test_records_ticks_and_events(self, match):
        log = MatchLogger(match)
        match.trigger_kick()
        for _ in range(50):
            match.update(1 / 60)
            log.record()

        assert len(log.ticks) == 50
        assert log.ticks[-1].tick == 50
        impulse_tick = log.ticks[44]
        assert any("kick_resolved" in e for e in impulse_tick.events)
        assert impulse_tick.ball.state == BallState.KICKED

    def test_kick_trigger_lands_on_first_tick(self, match):
        """Events emitted between records attach to the next record."""
        log = MatchLogger(match)
        match.trigger_kick()
        match.update(1 / 60)
        first = log.record()
        assert any("kick_triggered" in e for e in first.events)

    def test_ticks_with_events(self, match):
        log = MatchLogger(match)
        for _ in range(5):
            match.update(1 / 60)
            log.record()
        assert log.ticks_with_events() == []

    def test_detach_stops_recording_events(self, match):
        log = MatchLogger(match)
        log.detach()
        match.trigger_kick()
        match.update(1 / 60)
        assert log.record().events == []

    def test_json_export(self, match):
        log = MatchLogger(match)
        match.update(1 / 60)
        log.record()
        data = json.loads(log.to_json())
        assert data["ticks"][0]["ball"]["state"] == "resting"
        assert data["ticks"][0]["player"]["locomotion"] == "idle"
        assert data["score"] == {"ball_state": "resting", "goals": 0, "kicks": 0}

    def test_format_detached_match(self, config):
        from goalkick.simulation.orchestrator import Match

        match = Match(config=config)
        log = MatchLogger(match)
        match.update(1 / 60)
        text = log.record().format()
        assert text.startswith("TICK 1")
        assert "BALL" not in text


class TestRunScenario:
    """Tests for run_scenario()."""

    def test_center_penalty(self):
        result = run_scenario(PENALTY_CENTER)
        assert result.success
        assert result.final_state == BallState.SCORED
        assert result.aim == AimCandidate.CENTER
        assert result.metrics["ticks_to_impulse"] == 45
        assert result.metrics["ticks_to_goal_area"] < result.metrics["ticks_to_score"]
        assert result.metrics["goals"] == 1
        assert result.tick_count == result.metrics["ticks_to_score"]

    def test_all_presets_score(self):
        results = run_all()
        assert [r.scenario_name for r in results] == [s.name for s in SCENARIOS.values()]
        assert all(r.success for r in results)

    def test_random_is_reproducible(self):
        a = run_scenario(penalty_random(seed=21))
        b = run_scenario(penalty_random(seed=21))
        assert a.impulse == b.impulse
        assert a.tick_count == b.tick_count

    def test_gives_up_at_max_ticks(self):
        scenario = KickScenario(name="short", max_ticks=10)
        result = run_scenario(scenario)
        assert not result.success
        assert result.tick_count == 10
        assert result.final_state == BallState.RESTING
        assert result.impulse is None

    def test_record_keeps_log(self):
        result = run_scenario(PENALTY_CENTER, record=True)
        assert result.log is not None
        assert len(result.log.ticks) == result.tick_count

    def test_custom_spawn(self):
        scenario = KickScenario(name="close", ball_spawn=Vec3(0.0, 0.0, -80.0))
        result = run_scenario(scenario)
        assert result.success

    def test_summary_text(self):
        summary = run_scenario(PENALTY_CENTER).format_summary()
        assert "Scenario: penalty_center" in summary
        assert "GOAL" in summary
