"""Shared test fixtures."""

import pytest


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.run for tests."""
    from nrbt import process

    calls = []
    responses = []

    def fake_run(args):
        calls.append(("run", args))
        if responses:
            response = responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return process.Result(returncode=0, stdout=b"", stderr=b"")

    monkeypatch.setattr(process, "run", fake_run)

    return type("MockProcess", (), {"calls": calls, "responses": responses})()
