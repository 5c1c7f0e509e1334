import json

import pytest

from wordgames.errors import DuplicateGuess, GameOver, InvalidGuess, MaximumGuesses, ValidationError
from wordgames.games.base import IN_PROGRESS, LOST, WON
from wordgames.games.wordguess import Classification, MAXIMUM_GUESSES, classify

C, M, N = Classification.CORRECT, Classification.MISPLACED, Classification.NOT_FOUND

WORDS = ['peets', 'steep', 'steer', 'orate', 'radar', 'beats']
WRONG_GUESSES = ['adieu', 'spore', 'tulip', 'might', 'plumb', 'fjord']


def conditions(outcome):
    return [letter.classification for letter in outcome.letters]


def play(engine, words):
    state = engine.new_state()
    for w in words:
        state = engine.guess(state, w)
    return state


def test_classify_perfect():
    for word in WORDS:
        assert conditions(classify(word, word)) == [C] * 5


def test_classify_off_by_one():
    for word in WORDS:
        copied = list(word)
        copied[2] = 'b' if copied[2] == 'a' else 'a'
        result = conditions(classify(''.join(copied), word))
        assert result[:2] == [C, C]
        assert result[2] != C
        assert result[3:] == [C, C]


def test_classify_so_wrong_so_right():
    assert conditions(classify('peets', 'steep')) == [M, M, C, M, M]


def test_classify_does_not_account_for_repeated_letters():
    # 't' occurs once in the answer yet is misplaced at both positions
    assert conditions(classify('otter', 'orate')) == [C, M, M, M, M]


def test_correct_answer_wins(word_guess):
    state = word_guess.guess(word_guess.new_state(), 'orate')
    assert conditions(state.history[-1]) == [C] * 5
    assert state.status == WON


def test_adieu_against_orate(word_guess):
    state = word_guess.guess(word_guess.new_state(), 'adieu')
    assert [(l.value, l.classification) for l in state.history[0].letters] == [
        ('a', M), ('d', N), ('i', N), ('e', M), ('u', N),
    ]
    assert state.status == IN_PROGRESS


def test_input_is_case_insensitive(word_guess):
    state = word_guess.guess(word_guess.new_state(), '  ORATE ')
    assert state.status == WON
    assert state.history[0].word == 'orate'


@pytest.mark.parametrize('raw', ['abc', 'abcdef', '', 12345, None, ['o', 'r', 'a', 't', 'e']])
def test_wrong_shape_is_rejected(word_guess, raw):
    with pytest.raises(ValidationError):
        word_guess.guess(word_guess.new_state(), raw)


def test_non_alphabetic_is_invalid(word_guess):
    with pytest.raises(InvalidGuess):
        word_guess.guess(word_guess.new_state(), 'ab1de')


def test_repeating_a_guess_is_rejected(word_guess):
    state = word_guess.guess(word_guess.new_state(), 'adieu')
    with pytest.raises(DuplicateGuess):
        word_guess.guess(state, 'ADIEU')


def test_sixth_miss_loses_and_further_guesses_fail(word_guess):
    state = play(word_guess, WRONG_GUESSES)
    assert len(state.history) == MAXIMUM_GUESSES
    assert state.status == LOST
    with pytest.raises(MaximumGuesses):
        word_guess.guess(state, 'orate')
    assert len(state.history) == MAXIMUM_GUESSES


def test_win_on_last_guess_is_a_win(word_guess):
    state = play(word_guess, WRONG_GUESSES[:5] + ['orate'])
    assert state.status == WON
    with pytest.raises(GameOver):
        word_guess.guess(state, 'adieu')


def test_won_game_rejects_everything_with_game_over(word_guess):
    state = play(word_guess, ['orate'])
    for raw in ['adieu', 'orate', 'zz9zz']:
        with pytest.raises(GameOver):
            word_guess.guess(state, raw)


def test_shape_is_checked_before_terminal_state(word_guess):
    state = play(word_guess, ['orate'])
    with pytest.raises(ValidationError):
        word_guess.guess(state, 'abc')


def test_guess_does_not_mutate_input(word_guess):
    state = play(word_guess, ['adieu'])
    before = word_guess.dump_state(state)
    first = word_guess.guess(state, 'spore')
    second = word_guess.guess(state, 'spore')
    assert word_guess.dump_state(state) == before
    assert first == second


def test_state_round_trips_through_json(word_guess):
    state = play(word_guess, ['adieu', 'spore', 'otter'])
    blob = json.dumps(word_guess.dump_state(state))
    assert word_guess.load_state(json.loads(blob)) == state


def test_present_hides_answer_until_finished(word_guess):
    state = play(word_guess, ['adieu'])
    assert 'answer' not in word_guess.present(state)
    assert word_guess.present(play(word_guess, ['orate']))['answer'] == 'orate'


def test_load_state_rejects_bad_answer(word_guess):
    with pytest.raises(ValueError):
        word_guess.load_state({'history': [], 'answer': 'toolong'})
