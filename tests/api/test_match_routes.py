"""Tests for match API routes."""

import pytest
from fastapi.testclient import TestClient
from src.api.main import app
from src.api.services.match_service import MatchService

client = TestClient(app)


def create_started_match(seed: int = 1) -> str:
    """Create and start a match, returning its id."""
    match_id = client.post("/api/match/create", json={"seed": seed}).json()["match_id"]
    client.post(f"/api/match/{match_id}/start")
    return match_id


class TestRootEndpoints:
    """Tests for root endpoints."""

    def test_root(self):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["name"] == "Duel Simulator API"

    def test_health(self):
        """Test health check endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestMatchRoutes:
    """Tests for match lifecycle routes."""

    def test_create_match(self):
        response = client.post("/api/match/create", json={})
        assert response.status_code == 200
        data = response.json()
        assert "match_id" in data
        assert data["status"] == "idle"
        assert data["player"]["hp"] == 10_000
        assert data["ai"]["hp"] == 15_000
        assert data["match_duration_ms"] == 120_000

    def test_create_match_without_body(self):
        response = client.post("/api/match/create")
        assert response.status_code == 200

    def test_get_match(self):
        match_id = client.post("/api/match/create", json={}).json()["match_id"]

        response = client.get(f"/api/match/{match_id}")
        assert response.status_code == 200
        assert response.json()["match_id"] == match_id

    def test_get_nonexistent_match(self):
        response = client.get("/api/match/nonexistent")
        assert response.status_code == 404

    def test_start_nonexistent_match(self):
        response = client.post("/api/match/nonexistent/start")
        assert response.status_code == 404

    def test_start_pause_resume(self):
        match_id = client.post("/api/match/create", json={}).json()["match_id"]

        assert client.post(f"/api/match/{match_id}/start").json()["status"] == "playing"
        assert client.post(f"/api/match/{match_id}/pause").json()["status"] == "paused"

        paused = client.post(f"/api/match/{match_id}/advance", json={"elapsed_ms": 500}).json()
        assert paused["duration"] == 0

        assert client.post(f"/api/match/{match_id}/resume").json()["status"] == "playing"

    def test_advance(self):
        match_id = create_started_match()

        response = client.post(f"/api/match/{match_id}/advance", json={"elapsed_ms": 250})

        assert response.status_code == 200
        assert response.json()["duration"] == 250

    def test_advance_negative_rejected(self):
        match_id = create_started_match()
        response = client.post(f"/api/match/{match_id}/advance", json={"elapsed_ms": -10})
        assert response.status_code == 422

    def test_restart(self):
        match_id = create_started_match()
        client.post(f"/api/match/{match_id}/advance", json={"elapsed_ms": 1_000})

        data = client.post(f"/api/match/{match_id}/restart").json()

        assert data["status"] == "playing"
        assert data["duration"] == 0

    def test_delete_match(self):
        match_id = client.post("/api/match/create", json={}).json()["match_id"]

        response = client.delete(f"/api/match/{match_id}")
        assert response.status_code == 200

        get_response = client.get(f"/api/match/{match_id}")
        assert get_response.status_code == 404

    def test_delete_nonexistent_match(self):
        response = client.delete("/api/match/nonexistent")
        assert response.status_code == 404


class TestSkillRoutes:
    """Tests for skill routes."""

    def test_use_skill(self):
        match_id = create_started_match()

        response = client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_attack"})

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert data["damage"] == 300
        assert data["state"]["ai"]["hp"] == 14_700
        assert data["state"]["combat_log"][0]["type"] == "damage_dealt"

    def test_rejected_skill(self):
        match_id = create_started_match()
        client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_attack"})

        data = client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_attack"}).json()

        assert data["accepted"] is False
        assert data["reason"] == "gcd_active"

    def test_skill_before_start(self):
        match_id = client.post("/api/match/create", json={}).json()["match_id"]

        data = client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_attack"}).json()

        assert data["reason"] == "not_playing"

    def test_unknown_skill(self):
        match_id = create_started_match()
        data = client.post(f"/api/match/{match_id}/skill", json={"skill_id": "fireball"}).json()
        assert data["reason"] == "unknown_skill"

    def test_interrupt_missed(self):
        match_id = create_started_match()
        data = client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_interrupt"}).json()

        assert data["accepted"] is True
        assert data["interrupt"] == "missed"

    def test_skill_slots(self):
        match_id = create_started_match()
        client.post(f"/api/match/{match_id}/skill", json={"skill_id": "p_defensive"})

        response = client.get(f"/api/match/{match_id}/skills/player")

        assert response.status_code == 200
        slots = {s["skill_id"]: s for s in response.json()}
        assert slots["p_defensive"]["on_cooldown"] is True
        assert slots["p_defensive"]["available"] is False
        assert slots["p_attack"]["on_gcd"] is True
        assert slots["p_interrupt"]["available"] is True

    def test_skill_slots_unknown_actor(self):
        match_id = create_started_match()
        response = client.get(f"/api/match/{match_id}/skills/boss")
        assert response.status_code == 404


class TestResultRoutes:
    """Tests for result and diagnostics routes."""

    def test_result_not_finished(self):
        match_id = create_started_match()
        response = client.get(f"/api/match/{match_id}/result")
        assert response.status_code == 409

    def test_result_after_timeout(self):
        match_id = create_started_match()
        client.post(f"/api/match/{match_id}/advance", json={"elapsed_ms": 121_000})

        response = client.get(f"/api/match/{match_id}/result")

        assert response.status_code == 200
        data = response.json()
        assert data["winner"] in ("player", "ai", "tie")
        assert data["duration"] <= 120_000
        assert data["player_damage_taken"] == 10_000 - data["player_hp"]
        assert data["ai_damage_taken"] == data["player_damage_dealt"]
        assert data["player_interrupts"] == 0

    def test_diagnostics(self):
        match_id = create_started_match()
        response = client.get(f"/api/match/{match_id}/diagnostics")

        assert response.status_code == 200
        data = response.json()
        assert data["match_id"] == match_id
        assert isinstance(data["messages"], list)


class TestMatchService:
    """Tests for session management."""

    def test_oldest_session_evicted(self):
        service = MatchService(max_sessions=2)
        first = service.create_match().match_id
        second = service.create_match().match_id
        third = service.create_match().match_id

        assert service.session_count == 2
        assert service.get_match(first) is None
        assert service.get_match(second) is not None
        assert service.get_match(third) is not None

    def test_debug_logs_collected(self):
        service = MatchService(debug_logs=True)
        match_id = service.create_match(seed=4).match_id
        service.start(match_id)
        service.advance(match_id, 5_000)

        diagnostics = service.get_diagnostics(match_id)

        assert diagnostics.enabled
        assert len(diagnostics.messages) > 0

    def test_unknown_session_raises(self):
        service = MatchService()
        with pytest.raises(ValueError):
            service.advance("missing", 16)


class TestDataRoutes:
    """Tests for static data routes."""

    def test_get_config(self):
        response = client.get("/api/data/config")
        assert response.status_code == 200
        data = response.json()
        assert data["gcd_ms"] == 1_500
        assert data["player"]["name"] == "Wanderer"

    def test_get_skills(self):
        response = client.get("/api/data/skills/ai")
        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [
            "ai_normal",
            "ai_yellow_1",
            "ai_red_1",
            "ai_yellow_fast",
        ]

    def test_get_skill(self):
        response = client.get("/api/data/skills/player/p_interrupt")
        assert response.status_code == 200
        assert response.json()["triggers_gcd"] is False

    def test_get_skills_unknown_actor(self):
        response = client.get("/api/data/skills/boss")
        assert response.status_code == 404

    def test_get_unknown_skill(self):
        response = client.get("/api/data/skills/player/fireball")
        assert response.status_code == 404


class TestSimulationRoutes:
    """Tests for simulation routes."""

    def test_run_simulation(self):
        response = client.post("/api/simulation/run", json={"iterations": 2, "seed": 9})

        assert response.status_code == 200
        data = response.json()
        assert data["iterations"] == 2
        total = data["player_win_rate"] + data["ai_win_rate"] + data["tie_rate"]
        assert total == pytest.approx(1.0)
        assert len(data["confidence_interval"]) == 2

    def test_too_many_iterations(self):
        response = client.post("/api/simulation/run", json={"iterations": 1_000_000})
        assert response.status_code == 400

    def test_invalid_iterations(self):
        response = client.post("/api/simulation/run", json={"iterations": 0})
        assert response.status_code == 422
