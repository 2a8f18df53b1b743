from __future__ import annotations

import random
from dataclasses import dataclass, field

from .cards import Card, make_card
from .types import STANDARD_RANKS, STANDARD_SUITS, RulesConfig


@dataclass
class Deck:
    """Draw pile. The top of the deck is the end of `cards`."""

    cards: list[Card] = field(default_factory=list)

    @staticmethod
    def standard(rules: RulesConfig | None = None, include_jokers: bool = True) -> "Deck":
        cards: list[Card] = []
        next_id = 0
        for suit in STANDARD_SUITS:
            for rank in STANDARD_RANKS:
                cards.append(make_card(next_id, suit, rank, rules))
                next_id += 1
        if include_jokers:
            for _ in range(2):
                cards.append(make_card(next_id, "joker", "Joker", rules))
                next_id += 1
        return Deck(cards=cards)

    def shuffle(self, rng: random.Random) -> None:
        # Fisher-Yates
        for i in range(len(self.cards) - 1, 0, -1):
            j = rng.randint(0, i)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]

    def draw(self) -> Card | None:
        if not self.cards:
            return None
        return self.cards.pop()

    def draw_multiple(self, count: int) -> list[Card]:
        drawn: list[Card] = []
        for _ in range(max(0, count)):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return drawn

    def is_empty(self) -> bool:
        return not self.cards

    def card_count(self) -> int:
        return len(self.cards)

    def add_to_top(self, card: Card) -> None:
        self.cards.append(card)

    def add_to_bottom(self, card: Card) -> None:
        self.cards.insert(0, card)
