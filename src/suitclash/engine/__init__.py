"""Deterministic, headless rules engine for SuitClash.

IMPORTANT: This package must never import a rendering toolkit.
"""

from .actions import (
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
from .battle import apply_event, simulate, snapshot_player
from .cards import Card, make_card
from .deck import Deck
from .match import Match, StepResult, new_match, replay, step
from .player import Player
from .types import BattleEvent, MatchConfig, Phase, Rank, RulesConfig, Suit

__all__ = [
    "ApplyEventAction",
    "BattleEvent",
    "Card",
    "Deck",
    "DraftAction",
    "FinishBattleAction",
    "Match",
    "MatchConfig",
    "MoveCardAction",
    "NextRoundAction",
    "PassAction",
    "Phase",
    "PlayCardAction",
    "Player",
    "Rank",
    "RulesConfig",
    "SellCardAction",
    "StartBattleAction",
    "StepResult",
    "Suit",
    "apply_event",
    "make_card",
    "new_match",
    "replay",
    "simulate",
    "snapshot_player",
    "step",
]
