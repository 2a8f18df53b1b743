from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Collection, Iterable, Sequence

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
from .battle import apply_event, simulate, snapshot_player
from .cards import Card
from .deck import Deck
from .player import Player
from .types import DEFAULT_RULES, BattleEvent, MatchConfig, Phase, RulesConfig

ChangeListener = Callable[["Match"], None]

PLAYER_COUNT = 2


@dataclass
class StepResult:
    ok: bool
    error: str | None = None


class Match:
    """Authoritative state of one game session.

    Every mutating call returns a bool and never raises: wrong-phase calls,
    bad indices and unaffordable drafts are rejected and the reason is kept
    in `last_error`. A match is single-writer; `on_change` is invoked after
    each successful state change.
    """

    def __init__(
        self,
        player_names: Sequence[str] = ("Player", "Computer"),
        *,
        human_players: Collection[int] = (0,),
        seed: int | None = None,
        config: MatchConfig | None = None,
        rules: RulesConfig | None = None,
        on_change: ChangeListener | None = None,
    ) -> None:
        cfg = config or MatchConfig()
        if len(player_names) != PLAYER_COUNT:
            raise ValueError(f"A match needs exactly {PLAYER_COUNT} players.")
        if any(not name for name in player_names):
            raise ValueError("Player names must be non-empty.")
        if cfg.starting_health <= 0:
            raise ValueError("starting_health must be positive.")
        if cfg.draft_pool_size <= 0:
            raise ValueError("draft_pool_size must be positive.")

        self.config = cfg
        self.rules = rules or DEFAULT_RULES
        self.seed = seed
        self.rng = random.Random(seed)
        # Seeds the computer drafter; never consumed afterwards
        self.ai_seed = self.rng.getrandbits(64)
        self.players: list[Player] = [
            Player(
                id=str(i),
                name=name,
                health=cfg.starting_health,
                max_health=cfg.starting_health,
                is_human=i in human_players,
            )
            for i, name in enumerate(player_names)
        ]
        self.deck = Deck.standard(self.rules, include_jokers=cfg.include_jokers)
        self.draft_pool: list[Card] = []
        self.discard: list[Card] = []

        self.phase: Phase = "setup"
        self.round_number = 1
        self.turn_number = 1
        self.drafting_order: list[int] = []
        self.drafting_order_position = 0
        self.passed_this_phase: set[int] = set()

        self.battle_log: list[BattleEvent] = []
        self.battle_cursor = 0

        self.action_log: list[Action] = []
        self.last_error: str | None = None
        self.on_change = on_change

    # -- observation -------------------------------------------------------

    @property
    def active_drafter_index(self) -> int | None:
        if self.phase != "draft" or not self.drafting_order:
            return None
        return self.drafting_order[self.drafting_order_position]

    @property
    def active_drafter(self) -> Player | None:
        idx = self.active_drafter_index
        return None if idx is None else self.players[idx]

    @property
    def battle_finished(self) -> bool:
        return self.battle_cursor >= len(self.battle_log)

    def min_pool_cost(self) -> int | None:
        if not self.draft_pool:
            return None
        return min(c.cost for c in self.draft_pool)

    def can_afford_any(self, player_index: int) -> bool:
        cheapest = self.min_pool_cost()
        if cheapest is None:
            return False
        return self.players[player_index].draft_points >= cheapest

    def get_winner(self) -> Player | None:
        if self.phase != "game_over":
            return None
        alive = [p for p in self.players if not p.is_defeated()]
        if len(alive) == 1:
            return alive[0]
        return None

    def set_change_listener(self, listener: ChangeListener | None) -> None:
        self.on_change = listener

    # -- internals ---------------------------------------------------------

    def _reject(self, reason: str) -> bool:
        self.last_error = reason
        return False

    def _changed(self) -> bool:
        self.last_error = None
        if self.on_change is not None:
            self.on_change(self)
        return True

    def _valid_player(self, player_index: int) -> bool:
        return 0 <= player_index < len(self.players)

    def _is_eligible(self, player_index: int) -> bool:
        return player_index not in self.passed_this_phase and self.can_afford_any(player_index)

    def _compute_drafting_order(self) -> list[int]:
        count = len(self.players)
        if self.round_number == 1:
            first = self.rng.randrange(count)
            return [(first + i) % count for i in range(count)]
        # Catch-up: lowest health drafts first, ties by seat
        return sorted(range(count), key=lambda i: (self.players[i].health, i))

    def _refill_draft_pool(self) -> None:
        missing = self.config.draft_pool_size - len(self.draft_pool)
        if missing > 0:
            self.draft_pool.extend(self.deck.draw_multiple(missing))

    def _select_drafter(self, start: int) -> None:
        """Make the first eligible player at or after `start` the active drafter.

        Looks at each seat of the order at most once; ends the draft phase
        when nobody can act.
        """
        count = len(self.drafting_order)
        for offset in range(count):
            pos = (start + offset) % count
            if self._is_eligible(self.drafting_order[pos]):
                self.drafting_order_position = pos
                return
        self._end_draft_phase()

    def _advance_drafter(self) -> None:
        self.turn_number += 1
        self._select_drafter(self.drafting_order_position + 1)

    def _enter_draft_phase(self) -> None:
        self.phase = "draft"
        for p in self.players:
            p.draft_points = self.round_number + 1 + p.points_earned_from_sales
            p.points_earned_from_sales = 0
        self.passed_this_phase.clear()
        self.drafting_order = self._compute_drafting_order()
        self.drafting_order_position = 0
        self._refill_draft_pool()
        self._select_drafter(0)

    def _end_draft_phase(self) -> None:
        self.phase = "arrangement"
        for p in self.players:
            if p.is_human:
                continue
            while p.hand:
                p.play_card(0, len(p.battlefield))

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> bool:
        if self.phase != "setup":
            return self._reject("Match already started.")
        self.deck.shuffle(self.rng)
        self._enter_draft_phase()
        return self._changed()

    def draft_card(self, pool_index: int) -> bool:
        if self.phase != "draft":
            return self._reject("Not in the draft phase.")
        idx = self.active_drafter_index
        assert idx is not None
        if idx in self.passed_this_phase:
            return self._reject("Drafter already passed.")
        if pool_index < 0 or pool_index >= len(self.draft_pool):
            return self._reject("Invalid pool index.")
        player = self.players[idx]
        card = self.draft_pool[pool_index]
        if card.cost > player.draft_points:
            return self._reject("Not enough draft points.")

        self.draft_pool.pop(pool_index)
        player.add_card_to_hand(card)
        player.draft_points -= card.cost
        if not self.can_afford_any(idx):
            self._advance_drafter()
        return self._changed()

    def pass_draft(self) -> bool:
        if self.phase != "draft":
            return self._reject("Not in the draft phase.")
        idx = self.active_drafter_index
        assert idx is not None
        self.passed_this_phase.add(idx)
        self._advance_drafter()
        return self._changed()

    def play_card(self, player_index: int, hand_index: int, target_position: int) -> bool:
        if self.phase != "arrangement":
            return self._reject("Cards can only be placed during arrangement.")
        if not self._valid_player(player_index):
            return self._reject("Invalid player.")
        if not self.players[player_index].play_card(hand_index, target_position):
            return self._reject("Invalid hand index.")
        return self._changed()

    def move_battlefield_card(self, player_index: int, from_index: int, to_index: int) -> bool:
        if self.phase != "arrangement":
            return self._reject("Cards can only be moved during arrangement.")
        if not self._valid_player(player_index):
            return self._reject("Invalid player.")
        if not self.players[player_index].move_battlefield_card(from_index, to_index):
            return self._reject("Invalid battlefield index.")
        return self._changed()

    def rearrange_battlefield(self, player_index: int, new_order: Sequence[int]) -> bool:
        if self.phase != "arrangement":
            return self._reject("Cards can only be moved during arrangement.")
        if not self._valid_player(player_index):
            return self._reject("Invalid player.")
        if not self.players[player_index].rearrange_battlefield(new_order):
            return self._reject("New order must be a permutation of the battlefield.")
        return self._changed()

    def sell_card_from_battlefield(self, player_index: int, index: int) -> bool:
        if self.phase != "arrangement":
            return self._reject("Cards can only be sold during arrangement.")
        if not self._valid_player(player_index):
            return self._reject("Invalid player.")
        player = self.players[player_index]
        if index < 0 or index >= len(player.battlefield):
            return self._reject("Invalid battlefield index.")
        card = player.battlefield[index]
        player.sell_card_from_battlefield(index)
        self.discard.append(card)
        return self._changed()

    def start_battle(self) -> bool:
        if self.phase != "arrangement":
            return self._reject("Battle can only start after arrangement.")
        self.phase = "battle"
        first, second = (snapshot_player(p) for p in self.players)
        self.battle_log = simulate(
            first, second, self.rng, suit_synergies=self.config.suit_synergies
        )
        self.battle_cursor = 0
        return self._changed()

    def apply_next_event(self) -> bool:
        if self.phase != "battle":
            return self._reject("No battle in progress.")
        if self.battle_finished:
            return self._reject("Battle log exhausted.")
        event = self.battle_log[self.battle_cursor]
        removed = apply_event(self.players, event)
        if removed is not None:
            self.discard.append(removed)
        self.battle_cursor += 1
        return self._changed()

    def apply_remaining_events(self) -> int:
        applied = 0
        while self.phase == "battle" and not self.battle_finished:
            self.apply_next_event()
            applied += 1
        return applied

    def finish_battle(self) -> bool:
        if self.phase != "battle":
            return self._reject("No battle in progress.")
        if not self.battle_finished:
            return self._reject("Battle log not fully applied.")
        if any(p.is_defeated() for p in self.players):
            self.phase = "game_over"
        else:
            self.phase = "post_battle"
        return self._changed()

    def prepare_next_round(self) -> bool:
        if self.phase != "post_battle":
            return self._reject("Next round can only follow a finished battle.")
        self.round_number += 1
        self._enter_draft_phase()
        return self._changed()


def step(match: Match, action: Action) -> StepResult:
    """Apply a single action to the match.

    Deterministic for a given (seed, action sequence); every attempted action
    is appended to `match.action_log` so the match can be replayed.
    """
    if match.phase == "game_over":
        return StepResult(ok=False, error="Match already ended.")

    match.action_log.append(action)

    if isinstance(action, (DraftAction, PassAction)) and match.phase != "draft":
        return StepResult(ok=False, error="Not in the draft phase.")

    if isinstance(action, DraftAction):
        if action.player != match.active_drafter_index:
            return StepResult(ok=False, error="Not your turn.")
        ok = match.draft_card(action.pool_index)
    elif isinstance(action, PassAction):
        if action.player != match.active_drafter_index:
            return StepResult(ok=False, error="Not your turn.")
        ok = match.pass_draft()
    elif isinstance(action, PlayCardAction):
        ok = match.play_card(action.player, action.hand_index, action.target_position)
    elif isinstance(action, MoveCardAction):
        ok = match.move_battlefield_card(action.player, action.from_index, action.to_index)
    elif isinstance(action, SellCardAction):
        ok = match.sell_card_from_battlefield(action.player, action.battlefield_index)
    elif isinstance(action, StartBattleAction):
        ok = match.start_battle()
    elif isinstance(action, ApplyEventAction):
        ok = match.apply_next_event()
    elif isinstance(action, FinishBattleAction):
        ok = match.finish_battle()
    elif isinstance(action, NextRoundAction):
        ok = match.prepare_next_round()
    else:
        return StepResult(ok=False, error="Unknown action.")
    return StepResult(ok=ok, error=None if ok else match.last_error)


def new_match(
    seed: int,
    player_names: Sequence[str] = ("Player", "Computer"),
    *,
    human_players: Collection[int] = (0,),
    config: MatchConfig | None = None,
    rules: RulesConfig | None = None,
) -> Match:
    match = Match(
        player_names,
        human_players=human_players,
        seed=seed,
        config=config,
        rules=rules,
    )
    match.start()
    return match


def replay(
    seed: int,
    actions: Iterable[Action],
    player_names: Sequence[str] = ("Player", "Computer"),
    *,
    human_players: Collection[int] = (0,),
    config: MatchConfig | None = None,
    rules: RulesConfig | None = None,
) -> Match:
    match = new_match(
        seed, player_names, human_players=human_players, config=config, rules=rules
    )
    for a in actions:
        step(match, a)
        if match.phase == "game_over":
            break
    return match
