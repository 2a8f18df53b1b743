from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Suit = Literal["hearts", "diamonds", "clubs", "spades", "joker"]
Rank = Literal["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A", "Joker"]
Phase = Literal["setup", "draft", "arrangement", "battle", "post_battle", "game_over"]

EventKind = Literal["attack", "direct", "synergy_heal", "synergy_splash"]

STANDARD_SUITS: tuple[Suit, ...] = ("hearts", "diamonds", "clubs", "spades")
STANDARD_RANKS: tuple[Rank, ...] = (
    "A", "K", "Q", "J", "10", "9", "8", "7", "6", "5", "4", "3", "2",
)
FACE_RANKS: frozenset[Rank] = frozenset({"J", "Q", "K"})
JACK_BONUS_TARGETS: frozenset[Rank] = frozenset({"K", "Q", "A"})

JACK_BONUS = 1.5
KING_PENALTY = 0.8
SPADES_BONUS = 1.2


@dataclass(frozen=True)
class RankStats:
    strength: int
    health: int
    cost: int


def _number_stats(value: int) -> RankStats:
    return RankStats(strength=value, health=value, cost=2)


DEFAULT_RANK_STATS: dict[str, RankStats] = {
    **{str(v): _number_stats(v) for v in range(2, 11)},
    # Jacks are assassins: cheap, and they punish high ranks
    "J": RankStats(strength=11, health=11, cost=2),
    "Q": RankStats(strength=12, health=12, cost=3),
    # Kings are tanks
    "K": RankStats(strength=13, health=15, cost=4),
    "A": RankStats(strength=14, health=14, cost=5),
    "Joker": RankStats(strength=14, health=14, cost=5),
}


@dataclass(frozen=True, eq=False)
class RulesConfig:
    """Per-rank stat and pricing table used when cards are created."""

    rank_stats: dict[str, RankStats] = field(default_factory=lambda: dict(DEFAULT_RANK_STATS))

    def stats_for(self, rank: Rank) -> RankStats:
        return self.rank_stats[rank]

    def min_cost(self) -> int:
        return min(s.cost for s in self.rank_stats.values())


DEFAULT_RULES = RulesConfig()


@dataclass(frozen=True)
class MatchConfig:
    starting_health: int = 20
    draft_pool_size: int = 5
    include_jokers: bool = True
    suit_synergies: bool = False


@dataclass(frozen=True)
class BattleEvent:
    """One resolved action of a simulated battle.

    `defender_card_id` is None when the event targets a player directly
    (direct attacks and Hearts healing).
    """

    round: int
    kind: EventKind
    attacker_player: int
    attacker_card_id: int | None
    attacker_position: int | None
    defender_player: int
    defender_card_id: int | None
    damage: int
    defeated: bool
    description: str
