from collections import Counter
from itertools import permutations
from random import Random

import pytest

from klondike.cards import ACE, Card, Suit, card_key
from klondike.deck import DECK_SIZE, build_deck, create_shuffled_stock, stock_from_order


def test_build_deck_covers_every_rank_and_suit_once():
    deck = build_deck()
    keys = [card_key(card) for card in deck]
    assert len(deck) == DECK_SIZE
    assert len(set(keys)) == DECK_SIZE
    assert {rank for rank, _ in keys} == set(range(1, 14))
    assert {suit for _, suit in keys} == set(Suit)
    assert not any(card.is_face_up() for card in deck)


def test_shuffled_stock_is_a_face_down_permutation():
    stock = create_shuffled_stock(rng=Random(3))
    assert len(stock) == DECK_SIZE
    assert Counter(map(card_key, stock)) == Counter(map(card_key, build_deck()))
    assert not any(card.is_face_up() for card in stock)


def test_same_seed_gives_same_order():
    first = [card_key(card) for card in create_shuffled_stock(rng=Random(11))]
    second = [card_key(card) for card in create_shuffled_stock(rng=Random(11))]
    assert first == second


def test_top_card_is_uniform_over_the_deck():
    rng = Random(1234)
    trials = 5200
    counts = Counter(card_key(create_shuffled_stock(rng=rng)[-1]) for _ in range(trials))
    expected = trials / DECK_SIZE
    chi_square = sum((counts.get(card_key(card), 0) - expected) ** 2 / expected for card in build_deck())
    # 51 degrees of freedom; 95 is far beyond the 0.999 quantile.
    assert len(counts) == DECK_SIZE
    assert chi_square < 95


def test_position_of_a_given_card_is_uniform():
    rng = Random(99)
    trials = 5200
    positions = Counter()
    for _ in range(trials):
        stock = create_shuffled_stock(rng=rng)
        positions[next(i for i, card in enumerate(stock) if card.rank == 1 and card.suit is Suit.SPADES)] += 1
    expected = trials / DECK_SIZE
    chi_square = sum((positions.get(position, 0) - expected) ** 2 / expected for position in range(DECK_SIZE))
    assert chi_square < 95


def test_stock_from_order_turns_cards_down():
    deck = build_deck()
    deck[0].turn_up()
    stock = stock_from_order(deck)
    assert stock == deck
    assert not any(card.is_face_up() for card in stock)


def test_stock_from_order_rejects_short_or_duplicated_decks():
    with pytest.raises(ValueError):
        stock_from_order(build_deck()[:51])

    deck = build_deck()
    deck[5] = Card(deck[6].rank, deck[6].suit)
    with pytest.raises(ValueError, match="duplicate"):
        stock_from_order(deck)

    deck = build_deck()
    deck[5] = deck[6]
    with pytest.raises(ValueError):
        stock_from_order(deck)


def chi_square_over_orders(counts, trials, outcomes):
    expected = trials / len(outcomes)
    return sum((counts.get(order, 0) - expected) ** 2 / expected for order in outcomes)


def test_every_order_of_a_small_deck_is_equally_likely():
    rng = Random(2024)
    small = [Card(rank, Suit.HEARTS) for rank in range(1, 5)]
    trials = 4800
    counts = Counter(
        tuple(card.rank for card in create_shuffled_stock(rng=rng, cards=small)) for _ in range(trials)
    )
    outcomes = list(permutations(range(1, 5)))
    # 23 degrees of freedom; 55 is beyond the 0.999 quantile.
    assert set(counts) == set(outcomes)
    assert chi_square_over_orders(counts, trials, outcomes) < 55


def test_relative_order_of_the_aces_is_uniform():
    rng = Random(77)
    trials = 2400
    counts = Counter()
    for _ in range(trials):
        stock = create_shuffled_stock(rng=rng)
        counts[tuple(card.suit for card in stock if card.rank == ACE)] += 1
    outcomes = list(permutations(Suit))
    assert len(counts) == len(outcomes)
    assert chi_square_over_orders(counts, trials, outcomes) < 55
