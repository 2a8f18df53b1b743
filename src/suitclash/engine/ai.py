from __future__ import annotations

import random
from dataclasses import dataclass

from .actions import DraftAction, MoveCardAction, PassAction, PlayCardAction
from .cards import Card
from .match import Match, step


@dataclass(frozen=True)
class AISpec:
    """Simple AI tuning parameters.

    difficulty:
      0 = easy (makes mistakes)
      1 = normal
      2 = hard (orders its battlefield strongest first)
    """

    difficulty: int = 1


def _card_value(card: Card) -> float:
    return float(card.strength * 2 + card.health)


def _ai_rng(match: Match, player: int) -> random.Random:
    # Never draws from match.rng
    return random.Random(f"{match.ai_seed}:{match.round_number}:{match.turn_number}:{player}")


def _pick_draft(match: Match, player: int, spec: AISpec) -> int | None:
    ps = match.players[player]
    best: tuple[int, int] | None = None
    for idx, card in enumerate(match.draft_pool):
        if card.cost > ps.draft_points:
            continue
        if best is None or card.strength > best[0]:
            best = (card.strength, idx)
    if best is None:
        return None

    # Difficulty-based mistakes: easy AI sometimes takes the first affordable card
    if spec.difficulty <= 0 and _ai_rng(match, player).random() < 0.35:
        for idx, card in enumerate(match.draft_pool):
            if card.cost <= ps.draft_points:
                return idx
    return best[1]


def ai_draft_turn(match: Match, player: int, spec: AISpec | None = None) -> None:
    """Take the whole drafting turn for `player` if they are the active drafter.

    Drafts the strongest affordable pool card until none is affordable or the
    turn passes to someone else, then passes.
    """
    spec = spec or AISpec()
    while match.phase == "draft" and match.active_drafter_index == player:
        pick = _pick_draft(match, player, spec)
        if pick is None:
            step(match, PassAction(player=player))
            break
        step(match, DraftAction(player=player, pool_index=pick))


def ai_arrange(match: Match, player: int, spec: AISpec | None = None) -> None:
    """Place the whole hand, then order the battlefield for this AI's difficulty."""
    spec = spec or AISpec()
    if match.phase != "arrangement":
        return
    ps = match.players[player]
    while ps.hand:
        res = step(match, PlayCardAction(player=player, hand_index=0, target_position=len(ps.battlefield)))
        if not res.ok:
            return
    if spec.difficulty < 2:
        return
    # Selection sort via single moves so every change goes through the action log
    for target in range(len(ps.battlefield)):
        best_i = max(
            range(target, len(ps.battlefield)),
            key=lambda i: _card_value(ps.battlefield[i]),
        )
        if best_i != target:
            step(match, MoveCardAction(player=player, from_index=best_i, to_index=target))


def run_computer_turns(match: Match, spec: AISpec | None = None) -> None:
    """Play every non-human drafting turn until a human is up or the draft ends."""
    while match.phase == "draft":
        idx = match.active_drafter_index
        if idx is None or match.players[idx].is_human:
            return
        ai_draft_turn(match, idx, spec)
