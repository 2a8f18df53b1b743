from __future__ import annotations

import math
from dataclasses import dataclass

from .types import (
    DEFAULT_RULES,
    FACE_RANKS,
    JACK_BONUS,
    JACK_BONUS_TARGETS,
    KING_PENALTY,
    SPADES_BONUS,
    Rank,
    RulesConfig,
    Suit,
)


@dataclass
class Card:
    id: int
    suit: Suit
    rank: Rank
    strength: int
    health: int
    max_health: int
    cost: int
    defeated: bool = False

    def attack(self, target: Card | None) -> int:
        """Damage this card deals to `target`.

        `target=None` means the defending player is hit directly; the Spades
        bonus only applies to single-target card damage.
        """
        damage = float(self.strength)
        if self.rank == "J" and target is not None and target.rank in JACK_BONUS_TARGETS:
            damage *= JACK_BONUS
        if self.rank == "K":
            damage *= KING_PENALTY
        if self.suit == "spades" and target is not None:
            damage *= SPADES_BONUS
        return math.floor(damage)

    def take_damage(self, amount: int) -> None:
        if amount <= 0:
            return
        self.health = max(0, self.health - amount)
        if self.health <= 0:
            self.defeated = True

    def is_face_card(self) -> bool:
        return self.rank in FACE_RANKS

    def display_name(self) -> str:
        if self.rank == "Joker":
            return "Joker"
        return f"{self.rank} of {self.suit}"

    def reset(self) -> None:
        self.health = self.max_health
        self.defeated = False

    def clone(self) -> Card:
        return Card(
            id=self.id,
            suit=self.suit,
            rank=self.rank,
            strength=self.strength,
            health=self.health,
            max_health=self.max_health,
            cost=self.cost,
            defeated=self.defeated,
        )


def make_card(card_id: int, suit: Suit, rank: Rank, rules: RulesConfig | None = None) -> Card:
    stats = (rules or DEFAULT_RULES).stats_for(rank)
    return Card(
        id=card_id,
        suit=suit,
        rank=rank,
        strength=stats.strength,
        health=stats.health,
        max_health=stats.health,
        cost=stats.cost,
    )
