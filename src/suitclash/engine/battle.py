"""Battle simulation and replay.

`simulate` resolves a whole battle against detached snapshots and returns an
immutable event log. `apply_event` replays one entry of that log against the
live players. The live players are never touched while simulating, so the
log can be replayed at any pace (or all at once) with the same result.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from .cards import Card
from .player import Player
from .types import BattleEvent

HEARTS_SYNERGY_MIN = 2
CLUBS_SYNERGY_MIN = 3


@dataclass(frozen=True)
class PlayerSnapshot:
    name: str
    health: int
    max_health: int
    cards: tuple[Card, ...]


def snapshot_player(player: Player) -> PlayerSnapshot:
    return PlayerSnapshot(
        name=player.name,
        health=player.health,
        max_health=player.max_health,
        cards=tuple(c.clone() for c in player.battlefield),
    )


@dataclass
class _Side:
    """Scratch state for one player during a simulation."""

    name: str
    health: int
    max_health: int
    lineup: list[Card]
    removed: set[int] = field(default_factory=set)

    @staticmethod
    def from_snapshot(snap: PlayerSnapshot) -> "_Side":
        return _Side(
            name=snap.name,
            health=snap.health,
            max_health=snap.max_health,
            lineup=[c.clone() for c in snap.cards],
        )

    def card_at(self, position: int) -> Card | None:
        if position >= len(self.lineup):
            return None
        card = self.lineup[position]
        if card.id in self.removed:
            return None
        return card

    def alive(self) -> list[Card]:
        return [c for c in self.lineup if c.id not in self.removed]

    def front(self) -> Card | None:
        for c in self.lineup:
            if c.id not in self.removed:
                return c
        return None

    def count_suit(self, suit: str) -> int:
        return sum(1 for c in self.alive() if c.suit == suit)


def _resolve_attack(
    round_no: int, sides: list[_Side], attacker_i: int, position: int, card: Card
) -> BattleEvent:
    attacker = sides[attacker_i]
    defender_i = 1 - attacker_i
    defender = sides[defender_i]
    target = defender.front()

    if target is None:
        damage = card.attack(None)
        defender.health = max(0, defender.health - damage)
        return BattleEvent(
            round=round_no,
            kind="direct",
            attacker_player=attacker_i,
            attacker_card_id=card.id,
            attacker_position=position,
            defender_player=defender_i,
            defender_card_id=None,
            damage=damage,
            defeated=defender.health <= 0,
            description=(
                f"{attacker.name}'s {card.display_name()} attacks "
                f"{defender.name} directly for {damage} damage!"
            ),
        )

    damage = card.attack(target)
    target.take_damage(damage)
    defeated = target.health <= 0
    description = (
        f"{attacker.name}'s {card.display_name()} attacks {defender.name}'s "
        f"{target.display_name()} for {damage} damage."
    )
    if defeated:
        defender.removed.add(target.id)
        description += f" {defender.name}'s {target.display_name()} is defeated!"
    return BattleEvent(
        round=round_no,
        kind="attack",
        attacker_player=attacker_i,
        attacker_card_id=card.id,
        attacker_position=position,
        defender_player=defender_i,
        defender_card_id=target.id,
        damage=damage,
        defeated=defeated,
        description=description,
    )


def _resolve_synergies(round_no: int, sides: list[_Side]) -> list[BattleEvent]:
    events: list[BattleEvent] = []
    for p_i, side in enumerate(sides):
        hearts = side.count_suit("hearts")
        if hearts >= HEARTS_SYNERGY_MIN:
            amount = hearts // 2
            side.health = min(side.max_health, side.health + amount)
            events.append(
                BattleEvent(
                    round=round_no,
                    kind="synergy_heal",
                    attacker_player=p_i,
                    attacker_card_id=None,
                    attacker_position=None,
                    defender_player=p_i,
                    defender_card_id=None,
                    damage=amount,
                    defeated=False,
                    description=f"{side.name} heals {amount} health from Hearts synergy.",
                )
            )

        clubs = side.count_suit("clubs")
        if clubs >= CLUBS_SYNERGY_MIN:
            amount = clubs // 3
            opp_i = 1 - p_i
            opponent = sides[opp_i]
            for target in opponent.alive():
                target.take_damage(amount)
                defeated = target.health <= 0
                description = (
                    f"{side.name}'s Clubs synergy deals {amount} damage to "
                    f"{opponent.name}'s {target.display_name()}."
                )
                if defeated:
                    opponent.removed.add(target.id)
                    description += f" {opponent.name}'s {target.display_name()} is defeated!"
                events.append(
                    BattleEvent(
                        round=round_no,
                        kind="synergy_splash",
                        attacker_player=p_i,
                        attacker_card_id=None,
                        attacker_position=None,
                        defender_player=opp_i,
                        defender_card_id=target.id,
                        damage=amount,
                        defeated=defeated,
                        description=description,
                    )
                )
    return events


def simulate(
    first: PlayerSnapshot,
    second: PlayerSnapshot,
    rng: random.Random,
    *,
    suit_synergies: bool = False,
) -> list[BattleEvent]:
    """Resolve a battle between two snapshots (player 0 and player 1).

    Round `r` uses the card at position `r` of each pre-battle lineup. The
    randomly chosen initial attacker leads round 0 and the lead alternates
    every round. A card removed earlier in the battle forfeits its attack.
    """
    sides = [_Side.from_snapshot(first), _Side.from_snapshot(second)]
    lead = rng.randrange(2)
    rounds = max(len(s.lineup) for s in sides)

    events: list[BattleEvent] = []
    for round_no in range(rounds):
        order = ((lead + round_no) % 2, (lead + round_no + 1) % 2)
        for attacker_i in order:
            card = sides[attacker_i].card_at(round_no)
            if card is None:
                continue
            events.append(_resolve_attack(round_no, sides, attacker_i, round_no, card))
        if suit_synergies:
            events.extend(_resolve_synergies(round_no, sides))
    return events


def apply_event(players: Sequence[Player], event: BattleEvent) -> Card | None:
    """Apply one logged event to the live players.

    Returns the card removed from a battlefield, if the event defeated one.
    """
    defender = players[event.defender_player]
    if event.kind == "synergy_heal":
        defender.heal(event.damage)
        return None
    if event.defender_card_id is None:
        defender.take_damage(event.damage)
        return None

    pos = defender.find_battlefield_card(event.defender_card_id)
    if pos is None:
        return None
    card = defender.battlefield[pos]
    card.take_damage(event.damage)
    if card.health <= 0:
        return defender.remove_from_battlefield(pos)
    return None
