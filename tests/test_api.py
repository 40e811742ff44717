"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from skirmish.api.app import create_app
from skirmish.config import EncounterConfig

PREFIX = "/api/v1"


@pytest.fixture
def client():
    app = create_app(EncounterConfig(seed=42), configure_logging=False)
    with TestClient(app) as test_client:
        yield test_client


def _state(client):
    resp = client.get(f"{PREFIX}/state")
    assert resp.status_code == 200
    return resp.json()


class TestState:
    """Read-only state, cell and event endpoints."""

    def test_state_shape(self, client):
        data = _state(client)
        assert data["round"] == 1
        assert data["is_over"] is False
        assert data["winner"] is None
        assert len(data["creatures"]) == 6
        assert data["current_creature_id"] == data["turn_order"][0]
        assert len(data["turn_order"]) == 6

    def test_heroes_serialized_with_gear(self, client):
        heroes = [c for c in _state(client)["creatures"] if c["team"] == "heroes"]
        assert all(h["weapon"] is not None for h in heroes)
        assert all(h["weapon"]["durability"] is not None for h in heroes)

    def test_cell_lookup(self, client):
        creature = _state(client)["creatures"][0]
        resp = client.get(f"{PREFIX}/cells/{creature['x']}/{creature['y']}")
        assert resp.status_code == 200
        assert creature["id"] in [c["id"] for c in resp.json()["creatures"]]

    def test_cell_out_of_bounds(self, client):
        assert client.get(f"{PREFIX}/cells/99/99").status_code == 404

    def test_events_feed(self, client):
        resp = client.get(f"{PREFIX}/events", params={"since_round": 0, "limit": 10})
        assert resp.status_code == 200
        assert "events" in resp.json()

    def test_config(self, client):
        data = client.get(f"{PREFIX}/config").json()
        assert data["max_x"] == 10
        assert data["difficulty"] == "beginner"
        assert data["seed"] == 42


class TestActions:
    """Actions performed by the current creature."""

    def test_attack_self_rejected(self, client):
        current = _state(client)["current_creature_id"]
        resp = client.post(f"{PREFIX}/actions/attack", json={"target_id": current})
        assert resp.status_code == 400

    def test_attack_unknown_target(self, client):
        resp = client.post(f"{PREFIX}/actions/attack", json={"target_id": 10**9})
        assert resp.status_code == 404

    def test_attack_validates_body(self, client):
        assert client.post(f"{PREFIX}/actions/attack", json={}).status_code == 422

    def test_unknown_special_attack(self, client):
        data = _state(client)
        target = next(c["id"] for c in data["creatures"] if c["id"] != data["current_creature_id"])
        resp = client.post(f"{PREFIX}/actions/special", json={"target_id": target, "strategy": "moonbeam"})
        assert resp.status_code == 400

    def test_end_turn_advances(self, client):
        order = _state(client)["turn_order"]
        resp = client.post(f"{PREFIX}/actions/end-turn")
        assert resp.status_code == 200
        assert resp.json()["current_creature_id"] == order[1]

    def test_move_too_far_rejected(self, client):
        resp = client.post(f"{PREFIX}/actions/move", json={"x": 50, "y": 50})
        assert resp.status_code == 400

    def test_pick_returns_list(self, client):
        resp = client.post(f"{PREFIX}/actions/pick")
        assert resp.status_code == 200
        assert isinstance(resp.json()["picked"], list)


class TestControl:
    """Encounter lifecycle controls."""

    def test_reset_restores_round_one(self, client):
        for _ in range(6):
            client.post(f"{PREFIX}/actions/end-turn")
        assert _state(client)["round"] == 2
        resp = client.post(f"{PREFIX}/control/reset")
        assert resp.status_code == 200
        assert "#1" in resp.json()["message"]
        assert _state(client)["round"] == 1

    def test_initiative_sorts_turn_order(self, client):
        assert client.post(f"{PREFIX}/control/initiative").status_code == 200
        data = _state(client)
        by_id = {c["id"]: c for c in data["creatures"]}
        damages = [by_id[i]["base_damage"] for i in data["turn_order"]]
        assert damages == sorted(damages, reverse=True)

    def test_unknown_control_action(self, client):
        assert client.post(f"{PREFIX}/control/explode").status_code == 422
