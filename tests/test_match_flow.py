from __future__ import annotations

import pytest

from suitclash.engine.actions import DraftAction, NextRoundAction, PassAction, StartBattleAction
from suitclash.engine.ai import AISpec, ai_arrange, run_computer_turns
from suitclash.engine.cards import make_card
from suitclash.engine.match import Match, step
from suitclash.engine.types import MatchConfig


def _arranged(seed: int = 3) -> Match:
    match = Match(("Alice", "Bob"), human_players=(0, 1), seed=seed)
    match.start()
    while match.phase == "draft":
        match.pass_draft()
    return match


def test_construction_rejects_bad_player_setup() -> None:
    with pytest.raises(ValueError):
        Match(("Solo",))
    with pytest.raises(ValueError):
        Match(("A", "B", "C"))
    with pytest.raises(ValueError):
        Match(("A", ""))
    with pytest.raises(ValueError):
        Match(("A", "B"), config=MatchConfig(starting_health=0))
    with pytest.raises(ValueError):
        Match(("A", "B"), config=MatchConfig(draft_pool_size=0))


def test_new_match_starts_in_setup() -> None:
    match = Match(seed=1)
    assert match.phase == "setup"
    assert match.round_number == 1
    assert [p.health for p in match.players] == [20, 20]
    assert match.players[0].is_human
    assert not match.players[1].is_human
    assert match.active_drafter is None


def test_battle_phase_transitions() -> None:
    match = _arranged()
    match.players[0].battlefield = [make_card(100, "hearts", "5")]
    match.players[1].battlefield = [make_card(101, "clubs", "3")]

    assert not match.apply_next_event()
    assert not match.finish_battle()
    assert match.start_battle()
    assert match.phase == "battle"
    assert match.battle_log
    assert not match.start_battle()
    assert not match.prepare_next_round()
    assert not match.play_card(0, 0, 0)

    # Log must be exhausted first
    assert not match.finish_battle()
    assert match.last_error == "Battle log not fully applied."
    while match.apply_next_event():
        pass
    assert match.battle_finished
    assert not match.apply_next_event()
    assert match.finish_battle()
    assert match.phase == "post_battle"
    assert match.prepare_next_round()
    assert match.round_number == 2
    assert match.phase in ("draft", "arrangement")


def test_game_over_is_terminal() -> None:
    match = _arranged()
    match.players[1].health = 5
    match.players[0].battlefield = [make_card(100, "spades", "K")]
    match.players[1].battlefield = []

    assert match.start_battle()
    assert len(match.battle_log) == 1
    match.apply_remaining_events()
    assert match.players[1].health == 0
    assert match.finish_battle()
    assert match.phase == "game_over"
    assert match.get_winner() is match.players[0]

    assert not match.prepare_next_round()
    assert not match.start_battle()
    assert not match.draft_card(0)
    assert not match.pass_draft()
    res = step(match, NextRoundAction())
    assert not res.ok
    assert res.error == "Match already ended."


def test_winner_is_none_until_game_over() -> None:
    match = _arranged()
    assert match.get_winner() is None


def test_change_listener_called_after_each_change() -> None:
    seen: list[str] = []
    match = Match(("Alice", "Bob"), human_players=(0, 1), seed=4, on_change=lambda m: seen.append(m.phase))
    assert match.start()
    assert len(seen) == 1
    assert not match.finish_battle()
    assert len(seen) == 1
    while match.phase == "draft":
        match.pass_draft()
    assert seen[-1] == "arrangement"
    match.set_change_listener(None)
    assert match.start_battle()
    assert seen[-1] == "arrangement"


def test_step_checks_whose_turn_it_is() -> None:
    match = Match(("Alice", "Bob"), human_players=(0, 1), seed=8)
    match.start()
    match.phase = "draft"
    match.draft_pool = [make_card(100, "hearts", "2")]
    match.drafting_order = [1, 0]
    match.drafting_order_position = 0
    for p in match.players:
        p.draft_points = 2

    res = step(match, DraftAction(player=0, pool_index=0))
    assert not res.ok
    assert res.error == "Not your turn."
    assert step(match, PassAction(player=1)).ok
    res = step(match, StartBattleAction())
    assert not res.ok
    assert res.error == "Battle can only start after arrangement."
    assert len(match.action_log) == 3


def test_full_computer_game_keeps_invariants() -> None:
    def check(m: Match) -> None:
        for p in m.players:
            assert 0 <= p.health <= p.max_health
            assert p.draft_points >= 0
            for c in p.hand + p.battlefield:
                assert 0 <= c.health <= c.max_health

    for seed in range(5):
        match = Match(("North", "South"), human_players=(), seed=seed, on_change=check)
        match.start()
        phases = {match.phase}
        while match.phase != "game_over" and match.round_number <= 25:
            run_computer_turns(match, AISpec(difficulty=2))
            assert match.phase == "arrangement"
            for i in range(2):
                ai_arrange(match, i, AISpec(difficulty=2))
            assert match.start_battle()
            while match.apply_next_event():
                pass
            assert match.finish_battle()
            phases.add(match.phase)
            if match.phase == "post_battle":
                assert match.prepare_next_round()
        assert "post_battle" in phases or "game_over" in phases
        # Cards are never duplicated between zones
        ids = [c.id for c in match.deck.cards + match.draft_pool + match.discard]
        for p in match.players:
            ids += [c.id for c in p.hand + p.battlefield]
        assert len(ids) == len(set(ids)) == 54


def test_draft_actions_outside_draft_report_phase() -> None:
    match = _arranged()
    for action in (DraftAction(player=0, pool_index=0), PassAction(player=0)):
        res = step(match, action)
        assert not res.ok
        assert res.error == "Not in the draft phase."
    assert match.phase == "arrangement"


def test_unseeded_matches_get_distinct_ai_seeds() -> None:
    seeds = {Match(("A", "B")).ai_seed for _ in range(5)}
    assert len(seeds) == 5
    assert Match(("A", "B"), seed=7).ai_seed == Match(("A", "B"), seed=7).ai_seed
