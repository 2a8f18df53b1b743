from __future__ import annotations

from suitclash.engine.cards import make_card
from suitclash.engine.deck import Deck
from suitclash.engine.types import DEFAULT_RULES, RulesConfig


def test_number_cards_use_face_value() -> None:
    card = make_card(0, "hearts", "7")
    assert card.strength == 7
    assert card.health == 7
    assert card.max_health == 7
    assert card.cost == 2
    assert not card.defeated


def test_face_cards_and_top_ranks() -> None:
    jack = make_card(0, "clubs", "J")
    queen = make_card(1, "clubs", "Q")
    king = make_card(2, "clubs", "K")
    ace = make_card(3, "clubs", "A")
    joker = make_card(4, "joker", "Joker")

    assert (jack.strength, jack.health) == (11, 11)
    assert (queen.strength, queen.health) == (12, 12)
    # Kings trade strength for health
    assert (king.strength, king.health) == (13, 15)
    assert (ace.strength, ace.health) == (14, 14)
    assert (joker.strength, joker.health) == (14, 14)
    assert jack.is_face_card() and king.is_face_card()
    assert not ace.is_face_card()


def test_cost_schedule_is_rank_based() -> None:
    costs = {c.rank: c.cost for c in Deck.standard().cards}
    assert costs["2"] == costs["10"] == 2
    assert costs["J"] == 2
    assert costs["Q"] == 3
    assert costs["K"] == 4
    assert costs["A"] == 5
    assert costs["Joker"] == 5
    assert costs["J"] < costs["A"]


def test_jack_bonus_against_high_ranks() -> None:
    jack = make_card(0, "hearts", "J")
    assert jack.attack(make_card(1, "hearts", "Q")) == 16
    assert jack.attack(make_card(2, "hearts", "K")) == 16
    assert jack.attack(make_card(3, "hearts", "A")) == 16
    assert jack.attack(make_card(4, "hearts", "9")) == 11


def test_king_penalty_and_spades_bonus_compose() -> None:
    target = make_card(9, "diamonds", "2")
    assert make_card(0, "hearts", "K").attack(target) == 10
    assert make_card(1, "spades", "10").attack(target) == 12
    # 13 * 0.8 * 1.2 = 12.48
    assert make_card(2, "spades", "K").attack(target) == 12
    # 11 * 1.5 * 1.2 = 19.8
    assert make_card(3, "spades", "J").attack(make_card(4, "hearts", "K")) == 19


def test_direct_attack_skips_single_target_bonus() -> None:
    assert make_card(0, "spades", "K").attack(None) == 10
    assert make_card(1, "spades", "7").attack(None) == 7
    assert make_card(2, "hearts", "A").attack(None) == 14


def test_attack_has_no_side_effects() -> None:
    attacker = make_card(0, "spades", "A")
    target = make_card(1, "hearts", "K")
    attacker.attack(target)
    assert attacker.health == 14
    assert target.health == 15


def test_take_damage_clamps_and_defeats() -> None:
    card = make_card(0, "hearts", "5")
    card.take_damage(3)
    assert card.health == 2
    assert not card.defeated
    card.take_damage(10)
    assert card.health == 0
    assert card.defeated
    card.reset()
    assert card.health == card.max_health == 5
    assert not card.defeated


def test_clone_is_detached() -> None:
    card = make_card(0, "clubs", "Q")
    copy = card.clone()
    copy.take_damage(5)
    assert card.health == 12
    assert copy.health == 7
    assert copy.id == card.id


def test_display_name() -> None:
    assert make_card(0, "spades", "K").display_name() == "K of spades"
    assert make_card(1, "joker", "Joker").display_name() == "Joker"


def test_rules_config_is_hashable() -> None:
    assert hash(DEFAULT_RULES) == hash(DEFAULT_RULES)
    assert len({DEFAULT_RULES, RulesConfig()}) == 2
