from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .cards import Card
from .types import Suit


@dataclass
class Player:
    id: str
    name: str
    health: int
    max_health: int
    hand: list[Card] = field(default_factory=list)
    battlefield: list[Card] = field(default_factory=list)
    draft_points: int = 0
    points_earned_from_sales: int = 0
    is_human: bool = True

    def add_card_to_hand(self, card: Card) -> None:
        self.hand.append(card)

    def play_card(self, hand_index: int, target_position: int) -> bool:
        """Move a hand card onto the battlefield at `target_position` (clamped)."""
        if hand_index < 0 or hand_index >= len(self.hand):
            return False
        card = self.hand.pop(hand_index)
        position = min(max(0, target_position), len(self.battlefield))
        self.battlefield.insert(position, card)
        return True

    def remove_from_battlefield(self, index: int) -> Card | None:
        if index < 0 or index >= len(self.battlefield):
            return None
        return self.battlefield.pop(index)

    def sell_card_from_battlefield(self, index: int) -> bool:
        """Discard a battlefield card for one bonus draft point next round."""
        if self.remove_from_battlefield(index) is None:
            return False
        self.points_earned_from_sales += 1
        return True

    def move_battlefield_card(self, from_index: int, to_index: int) -> bool:
        if from_index < 0 or from_index >= len(self.battlefield):
            return False
        card = self.battlefield.pop(from_index)
        position = min(max(0, to_index), len(self.battlefield))
        self.battlefield.insert(position, card)
        return True

    def rearrange_battlefield(self, new_order: Sequence[int]) -> bool:
        if sorted(new_order) != list(range(len(self.battlefield))):
            return False
        self.battlefield = [self.battlefield[i] for i in new_order]
        return True

    def take_damage(self, amount: int) -> None:
        if amount <= 0:
            return
        self.health = max(0, self.health - amount)

    def heal(self, amount: int) -> None:
        if amount <= 0:
            return
        self.health = min(self.max_health, self.health + amount)

    def is_defeated(self) -> bool:
        return self.health <= 0

    def has_suit(self, suit: Suit) -> bool:
        return any(c.suit == suit for c in self.battlefield)

    def count_suit(self, suit: Suit) -> int:
        return sum(1 for c in self.battlefield if c.suit == suit)

    def hand_size(self) -> int:
        return len(self.hand)

    def battlefield_size(self) -> int:
        return len(self.battlefield)

    def find_battlefield_card(self, card_id: int) -> int | None:
        for i, c in enumerate(self.battlefield):
            if c.id == card_id:
                return i
        return None
