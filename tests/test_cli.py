from __future__ import annotations

import json
from pathlib import Path

import pytest

from suitclash.cli import main


def test_headless_match_runs(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--seed", "3", "--max-rounds", "6"]) == 0
    out = capsys.readouterr().out
    assert "== Round 1 ==" in out


def test_headless_match_writes_telemetry(tmp_path: Path) -> None:
    path = tmp_path / "telemetry.jsonl"
    assert main(["--seed", "5", "--max-rounds", "4", "--synergies", "--telemetry", str(path)]) == 0
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    types = {r["type"] for r in records}
    assert "state_changed" in types
    for r in records:
        if r["type"] == "battle_event":
            assert r["payload"]["damage"] >= 0
