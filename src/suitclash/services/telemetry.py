from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from suitclash.engine.match import Match
from suitclash.engine.serialize import event_to_dict


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")


@dataclass
class TelemetryRecorder:
    """Change listener that mirrors a match into telemetry records.

    Register with `match.set_change_listener(recorder)`.
    """

    telemetry: TelemetryService
    _applied: int = field(default=0, init=False)

    def __call__(self, match: Match) -> None:
        # Battle events applied since the last notification
        while self._applied < match.battle_cursor:
            event = match.battle_log[self._applied]
            self.telemetry.log("battle_event", event_to_dict(event))
            self._applied += 1
        if match.phase != "battle":
            self._applied = 0
        self.telemetry.log(
            "state_changed",
            {
                "phase": match.phase,
                "round": match.round_number,
                "turn": match.turn_number,
                "health": [p.health for p in match.players],
            },
        )
