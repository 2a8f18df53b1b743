from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DraftAction:
    player: int
    pool_index: int


@dataclass(frozen=True)
class PassAction:
    player: int


@dataclass(frozen=True)
class PlayCardAction:
    player: int
    hand_index: int
    target_position: int


@dataclass(frozen=True)
class MoveCardAction:
    player: int
    from_index: int
    to_index: int


@dataclass(frozen=True)
class SellCardAction:
    player: int
    battlefield_index: int


@dataclass(frozen=True)
class StartBattleAction:
    pass


@dataclass(frozen=True)
class ApplyEventAction:
    pass


@dataclass(frozen=True)
class FinishBattleAction:
    pass


@dataclass(frozen=True)
class NextRoundAction:
    pass


Action = (
    DraftAction
    | PassAction
    | PlayCardAction
    | MoveCardAction
    | SellCardAction
    | StartBattleAction
    | ApplyEventAction
    | FinishBattleAction
    | NextRoundAction
)
