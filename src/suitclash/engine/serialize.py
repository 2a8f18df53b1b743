from __future__ import annotations

from dataclasses import asdict

from .actions import (
    Action,
    ApplyEventAction,
    DraftAction,
    FinishBattleAction,
    MoveCardAction,
    NextRoundAction,
    PassAction,
    PlayCardAction,
    SellCardAction,
    StartBattleAction,
)
from .cards import Card
from .match import Match
from .player import Player
from .types import BattleEvent

_ACTION_TYPES: dict[type, str] = {
    DraftAction: "draft",
    PassAction: "pass",
    PlayCardAction: "play",
    MoveCardAction: "move",
    SellCardAction: "sell",
    StartBattleAction: "start_battle",
    ApplyEventAction: "apply_event",
    FinishBattleAction: "finish_battle",
    NextRoundAction: "next_round",
}


def action_to_dict(a: Action) -> dict[str, object]:
    out: dict[str, object] = {"type": _ACTION_TYPES.get(type(a), "unknown")}
    out.update(asdict(a))
    return out


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "id": c.id,
        "suit": c.suit,
        "rank": c.rank,
        "name": c.display_name(),
        "strength": c.strength,
        "health": c.health,
        "max_health": c.max_health,
        "cost": c.cost,
        "defeated": c.defeated,
    }


def player_to_dict(p: Player) -> dict[str, object]:
    return {
        "id": p.id,
        "name": p.name,
        "health": p.health,
        "max_health": p.max_health,
        "hand": [card_to_dict(c) for c in p.hand],
        "battlefield": [card_to_dict(c) for c in p.battlefield],
        "draft_points": p.draft_points,
        "points_earned_from_sales": p.points_earned_from_sales,
        "is_human": p.is_human,
    }


def event_to_dict(e: BattleEvent) -> dict[str, object]:
    return asdict(e)


def snapshot(match: Match) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current match state."""
    return {
        "seed": match.seed,
        "phase": match.phase,
        "round_number": match.round_number,
        "turn_number": match.turn_number,
        "active_drafter": match.active_drafter_index,
        "drafting_order": list(match.drafting_order),
        "drafting_order_position": match.drafting_order_position,
        "passed_this_phase": sorted(match.passed_this_phase),
        "players": [player_to_dict(p) for p in match.players],
        "deck_size": match.deck.card_count(),
        "draft_pool": [card_to_dict(c) for c in match.draft_pool],
        "discard": [c.id for c in match.discard],
        "battle_log": [event_to_dict(e) for e in match.battle_log],
        "battle_cursor": match.battle_cursor,
        "action_log": [action_to_dict(a) for a in match.action_log],
    }
