from collections import Counter

from bots.baseline_greedy import GreedyBot
from bots.bot_arena import apply_click, play_game, run_games
from bots.random_bot import RandomBot
from klondike.cards import KING, Card, Suit, card_key
from klondike.deck import build_deck
from klondike.game import GameSession, KlondikeGame
from klondike.state import GameState

FULL_DECK = Counter(card_key(card) for card in build_deck())


def assert_conserved(game: KlondikeGame) -> None:
    cards = list(game.state.all_cards())
    assert len(cards) == 52
    assert len({id(card) for card in cards}) == 52
    assert Counter(card_key(card) for card in cards) == FULL_DECK


def test_random_clicks_conserve_every_card():
    session = GameSession(seed=21)
    bot = RandomBot(seed=8)
    for _ in range(3):
        game = session.start_game()
        assert_conserved(game)
        for _ in range(800):
            apply_click(game, bot.next_click(game))
            assert_conserved(game)
        session.finish_game()


def test_greedy_bot_keeps_the_deck_intact():
    session = GameSession(seed=4)
    game = session.start_game()
    play_game(game, GreedyBot(), max_clicks=1500)
    assert_conserved(game)
    assert game.clicks <= 1500


def test_greedy_bot_finishes_a_nearly_won_game():
    game = KlondikeGame(deck=build_deck())
    foundations = [[Card(rank, suit, face_up=True) for rank in range(1, KING)] for suit in Suit]
    piles = [[] for _ in range(7)]
    for index, suit in enumerate(Suit):
        piles[index].append(Card(KING, suit))
    game.state = GameState(stock=[], foundations=foundations, piles=piles)

    play_game(game, GreedyBot(), max_clicks=100)

    assert game.is_won()


def test_run_games_reports_history():
    results = run_games(GreedyBot(), n_games=2, seed=7, max_clicks=400)
    assert results["games_played"] == 2
    assert len(results["history"]) == 2
    assert all(entry["clicks"] <= 400 for entry in results["history"])
