"""Integration tests for the liveness endpoint."""

from __future__ import annotations


def test_health_check_works(client) -> None:
    resp = client.get("/health_check")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": "ok"}


def test_unknown_routes_are_problem_json(client) -> None:
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"
