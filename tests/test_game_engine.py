import random

import pytest

from nothanks.errors import (
    CardStillOutError,
    DeckEmptyError,
    GameNotOverError,
    InsufficientTokensError,
    InvalidPlayerNameError,
    InvalidStartingPlayerError,
    NoCardRevealedError,
    UnsupportedPlayerCountError,
)
from nothanks.game_engine import GameEngine
from nothanks.game_state import Phase
from nothanks.snapshot import dump_state


def test_new_game_setup(make_game):
    game = make_game(first_player=2)
    assert [p.name for p in game.players] == ["alice", "bob", "carol", "dave"]
    assert all(p.tokens == 11 and p.hand == [] for p in game.players)
    assert game.tokens_dealt == 44
    assert game.deck_size == 24
    assert game.current_card is None
    assert game.pool == 0
    assert game.active_player == 2
    assert game.phase == Phase.AWAITING_REVEAL
    assert game.check_invariants() == []


@pytest.mark.parametrize("count", [2, 8])
def test_new_game_rejects_player_count(engine, count):
    with pytest.raises(UnsupportedPlayerCountError):
        engine.new_game([f"p{i}" for i in range(count)])


def test_new_game_rejects_bad_names(engine):
    with pytest.raises(InvalidPlayerNameError):
        engine.new_game(["alice", "bob", "alice"])
    with pytest.raises(InvalidPlayerNameError):
        engine.new_game(["alice", "bob", "  "])


@pytest.mark.parametrize("choice", [-1, 4, 10, True, "1"])
def test_new_game_rejects_out_of_range_first_player(engine, choice):
    with pytest.raises(InvalidStartingPlayerError):
        engine.new_game(["a", "b", "c", "d"], first_player=choice)


def test_new_game_random_first_player_is_valid():
    seen = set()
    for seed in range(30):
        game = GameEngine(random.Random(seed)).new_game(["a", "b", "c"])
        assert 0 <= game.active_player < 3
        seen.add(game.active_player)
    assert seen == {0, 1, 2}


def test_new_game_shuffle_keeps_everyone():
    names = ["a", "b", "c", "d", "e", "f", "g"]
    orders = set()
    for seed in range(10):
        game = GameEngine(random.Random(seed)).new_game(names, shuffle=True, first_player=0)
        assert sorted(p.name for p in game.players) == names
        assert all(p.tokens == 7 for p in game.players)
        orders.add(tuple(p.name for p in game.players))
    assert len(orders) > 1


def test_reveal_sets_card_and_resets_pool(engine, make_game):
    game = make_game()
    game.pool = 0
    card = engine.reveal_top_card(game)
    assert game.current_card == card
    assert card not in game.deck
    assert game.deck_size == 23
    assert game.pool == 0
    assert game.phase == Phase.CARD_REVEALED
    assert game.check_invariants() == []


def test_reveal_while_card_out_fails_without_changes(engine, make_game):
    game = make_game()
    card = engine.reveal_top_card(game)
    before = dump_state(game)
    with pytest.raises(CardStillOutError) as excinfo:
        engine.reveal_top_card(game)
    assert excinfo.value.card == card
    assert str(card) in str(excinfo.value)
    assert dump_state(game) == before


def test_reveal_on_empty_deck(engine, make_game):
    game = make_game()
    game.deck = []
    with pytest.raises(DeckEmptyError):
        engine.reveal_top_card(game)


def test_take_without_card_fails_without_changes(engine, make_game):
    game = make_game()
    before = dump_state(game)
    with pytest.raises(NoCardRevealedError):
        engine.take_card(game)
    with pytest.raises(NoCardRevealedError):
        engine.no_thanks(game)
    assert dump_state(game) == before


def test_take_collects_pool_and_keeps_active_player(engine, make_game):
    game = make_game(first_player=0)
    card = engine.reveal_top_card(game)
    engine.no_thanks(game)  # alice
    engine.no_thanks(game)  # bob
    assert game.active_player == 2
    assert game.pool == 2

    taken = engine.take_card(game)  # carol
    assert taken == card
    carol = game.players[2]
    assert carol.hand == [card]
    assert carol.tokens == 13
    assert game.pool == 0
    assert game.current_card is None
    assert game.active_player == 2
    assert game.phase == Phase.AWAITING_REVEAL
    assert game.check_invariants() == []


def test_no_thanks_advances_and_wraps(engine, make_game):
    game = make_game(first_player=2)
    engine.reveal_top_card(game)
    assert engine.no_thanks(game) == 3
    assert engine.no_thanks(game) == 0
    assert game.pool == 2
    assert game.players[2].tokens == 10
    assert game.players[3].tokens == 10


def test_no_thanks_with_zero_tokens_fails_without_changes(engine, make_game):
    game = make_game(first_player=1)
    game.players[1].tokens = 0
    game.players[0].tokens += 11
    engine.reveal_top_card(game)
    before = dump_state(game)
    with pytest.raises(InsufficientTokensError):
        engine.no_thanks(game)
    assert dump_state(game) == before


def test_full_game_reaches_game_over(engine, make_game):
    game = make_game()
    reveals = 0
    while game.phase == Phase.AWAITING_REVEAL:
        engine.reveal_top_card(game)
        reveals += 1
        engine.take_card(game)
        assert game.check_invariants() == []

    assert reveals == 33 - 9
    assert game.phase == Phase.GAME_OVER
    assert game.is_over
    # Nobody ever passed, so the starting player took every card
    assert len(game.players[0].hand) == 24
    assert sum(p.tokens for p in game.players) == 44
    assert "game over" in game.action_history[-1]


def test_random_play_conserves_cards_and_tokens():
    rng = random.Random(5)
    for seed in range(20):
        engine = GameEngine(random.Random(seed))
        game = engine.new_game(["a", "b", "c", "d", "e"])
        while not game.is_over:
            if game.current_card is None:
                engine.reveal_top_card(game)
            elif game.active.tokens > 0 and rng.random() < 0.6:
                engine.no_thanks(game)
            else:
                engine.take_card(game)
            assert game.check_invariants() == []
        assert sum(len(p.hand) for p in game.players) == 24


def test_reveal_scores_only_when_over(engine, make_game):
    game = make_game()
    with pytest.raises(GameNotOverError):
        engine.reveal_scores(game)

    while not game.is_over:
        engine.reveal_top_card(game)
        engine.take_card(game)

    standings = engine.reveal_scores(game)
    assert game.phase == Phase.SCORES_REVEALED
    assert standings[0].rank == 1
    assert [s.score for s in standings] == sorted(s.score for s in standings)
    # Revealing twice is harmless
    assert engine.reveal_scores(game) == standings


def test_public_state_hides_other_players_tokens(engine, make_game):
    game = make_game()
    state = game.public_state(viewer="bob")
    tokens = {p['name']: p['tokens'] for p in state['players']}
    assert tokens == {"alice": None, "bob": 11, "carol": None, "dave": None}
    assert 'deck' not in state
    assert state['deck_size'] == 24
    assert state['active_player'] == "alice"
    assert 'standings' not in state
