import random

import pytest

from binbreak.buffer import Buffer
from binbreak.game import LIVES, BinaryNumbersGame, Bits, Phase, format_bits
from binbreak.keybinds import ENTER, ESC, LEFT, RIGHT, KeyEvent


def _game(bits=Bits.FOUR, clock=None) -> BinaryNumbersGame:
    if clock is None:
        return BinaryNumbersGame(bits, random.Random(7))
    return BinaryNumbersGame(bits, random.Random(7), clock)


def _answer(game: BinaryNumbersGame, correct: bool):
    index = game.suggestions.index(game.target)
    if not correct:
        index = (index + 1) % len(game.suggestions)
    game.selected = index
    game.handle_input(KeyEvent(ENTER))


def test_format_bits_groups_nibbles() -> None:
    assert format_bits(0b1011, 4) == "1 0 1 1"
    assert format_bits(0x1F, 8) == "0 0 0 1  1 1 1 1"
    assert format_bits(0b101, 6) == "0 0  0 1 0 1"


@pytest.mark.parametrize("bits", list(Bits))
def test_values_fit_the_difficulty(bits) -> None:
    rng = random.Random(3)
    for _ in range(50):
        value = bits.random_value(rng)
        assert 0 < value < (1 << bits.width)
        assert value % (1 << bits.shift) == 0


def test_new_game_offers_distinct_suggestions_including_the_answer() -> None:
    game = _game(Bits.FOUR_SHIFT_4)
    assert game.is_active()
    assert len(set(game.suggestions)) == 4
    assert game.target in game.suggestions
    assert all(v % 16 == 0 for v in game.suggestions)


def test_timer_runs_out_and_costs_a_life() -> None:
    game = _game()
    game.run(game.bits.time_limit - 0.5)
    assert game.is_active()

    game.run(1.0)

    assert not game.is_active()
    assert game.phase is Phase.RESULT
    assert game.lives == LIVES - 1
    assert game.time_left == 0.0
    assert game.last_result.startswith("time's up")


def test_run_is_ignored_between_rounds() -> None:
    game = _game()
    _answer(game, correct=True)
    left = game.time_left
    game.run(100.0)
    assert game.time_left == left
    assert game.lives == LIVES


def test_correct_answer_scores_and_builds_streak() -> None:
    game = _game()
    _answer(game, correct=True)
    assert game.phase is Phase.RESULT
    assert game.score > 0 and game.streak == 1

    game.handle_input(KeyEvent(ENTER))
    assert game.is_active()
    _answer(game, correct=True)
    assert game.streak == 2 and game.best_streak == 2


def test_wrong_answer_resets_streak() -> None:
    game = _game()
    _answer(game, correct=True)
    game.handle_input(KeyEvent(ENTER))
    _answer(game, correct=False)
    assert game.streak == 0
    assert game.best_streak == 1
    assert game.lives == LIVES - 1


def test_left_right_wrap_over_suggestions() -> None:
    game = _game()
    game.handle_input(KeyEvent(LEFT))
    assert game.selected == 3
    game.handle_input(KeyEvent(RIGHT))
    game.handle_input(KeyEvent("l"))
    assert game.selected == 1


def test_game_over_after_losing_every_life_and_restart() -> None:
    game = _game()
    for _ in range(LIVES):
        _answer(game, correct=False)
        if game.phase is Phase.RESULT:
            game.handle_input(KeyEvent(ENTER))
    assert game.phase is Phase.GAME_OVER
    assert not game.is_active()

    game.handle_input(KeyEvent(ENTER))

    assert game.is_active()
    assert game.lives == LIVES and game.score == 0


@pytest.mark.parametrize("code", [ESC, "q"])
def test_exit_keys_mark_exit_intended(code) -> None:
    game = _game()
    assert not game.is_exit_intended()
    game.handle_input(KeyEvent(code))
    assert game.is_exit_intended()


def test_render_shows_the_binary_number() -> None:
    game = _game(Bits.EIGHT)
    buf = Buffer(80, 24)
    game.render(buf.area, buf)
    text = "\n".join(buf.rows())
    assert format_bits(game.target, 8) in text
    assert str(game.suggestions[0]) in text


def test_render_game_over_and_tiny_buffers() -> None:
    game = _game()
    for _ in range(LIVES):
        _answer(game, correct=False)
        if game.phase is Phase.RESULT:
            game.handle_input(KeyEvent(ENTER))
    buf = Buffer(80, 24)
    game.render(buf.area, buf)
    assert any("final score" in row for row in buf.rows())

    small = Buffer(10, 4)
    game.render(small.area, small)
    _game().render(small.area, small)


def test_spinner_follows_the_clock(clock) -> None:
    game = _game(clock=clock)
    assert game.spinner.current_frame_index() == 0
    clock.advance(0.2)
    assert game.spinner.current_frame_index() == 1


def test_timer_bar_drains_with_time_left() -> None:
    game = _game()
    buf = Buffer(80, 24)
    game.render(buf.area, buf)
    full = buf.rows()[6]
    assert full.count("█") == 68 and "░" not in full

    game.run(game.bits.time_limit / 2)
    buf = Buffer(80, 24)
    game.render(buf.area, buf)
    half = buf.rows()[6]
    assert half.count("█") == 34 and half.count("░") == 34
    assert buf.cell(6, 6).style == "bright_yellow"
