from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from suitclash.engine.types import MatchConfig, RankStats, RulesConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _parse_rank_stats(raw: Mapping[str, object]) -> RankStats:
    return RankStats(
        strength=_require_int(raw, "strength"),
        health=_require_int(raw, "health"),
        cost=_require_int(raw, "cost"),
    )


def _parse_match_config(raw: Mapping[str, object]) -> MatchConfig:
    defaults = MatchConfig()
    return MatchConfig(
        starting_health=int(raw.get("starting_health", defaults.starting_health)),  # type: ignore[arg-type]
        draft_pool_size=int(raw.get("draft_pool_size", defaults.draft_pool_size)),  # type: ignore[arg-type]
        include_jokers=bool(raw.get("include_jokers", defaults.include_jokers)),
        suit_synergies=bool(raw.get("suit_synergies", defaults.suit_synergies)),
    )


@dataclass(frozen=True)
class GameRules:
    rules: RulesConfig
    match: MatchConfig


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_rules(self, filename: str = "rules.json") -> GameRules:
        path = self._data_dir / filename
        schema = _load_json(self._schema_dir / "rules.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{filename} must be an object")

        raw_ranks = raw.get("ranks")
        if not isinstance(raw_ranks, dict):
            raise ContentError(f"{filename}.ranks must be an object")
        rank_stats: dict[str, RankStats] = {}
        for rank, stats in raw_ranks.items():
            if not isinstance(stats, dict):
                raise ContentError(f"Invalid stats for rank {rank}")
            rank_stats[rank] = _parse_rank_stats(stats)

        raw_match = raw.get("match", {})
        if not isinstance(raw_match, dict):
            raise ContentError(f"{filename}.match must be an object")

        return GameRules(rules=RulesConfig(rank_stats=rank_stats), match=_parse_match_config(raw_match))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
