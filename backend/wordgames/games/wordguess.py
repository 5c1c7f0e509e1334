"""WordGuess: find the five-letter word of the day in six tries."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from wordgames.errors import DuplicateGuess, GameOver, InvalidGuess, MaximumGuesses, ValidationError
from wordgames.games.base import GameEngine, IN_PROGRESS, LOST, WON

WORD_LENGTH = 5
MAXIMUM_GUESSES = 6


class Classification(str, Enum):
    CORRECT = 'correct'
    MISPLACED = 'misplaced'
    NOT_FOUND = 'not_found'


@dataclass(frozen=True)
class Letter:
    value: str
    classification: Classification

    def to_dict(self):
        return {'value': self.value, 'classification': self.classification.value}


@dataclass(frozen=True)
class GuessOutcome:
    letters: Tuple[Letter, ...]

    @property
    def word(self) -> str:
        return ''.join(letter.value for letter in self.letters)

    @property
    def is_correct(self) -> bool:
        return all(letter.classification == Classification.CORRECT for letter in self.letters)

    def to_dict(self):
        return {'letters': [letter.to_dict() for letter in self.letters]}


@dataclass(frozen=True)
class WordGuessState:
    history: Tuple[GuessOutcome, ...]
    answer: str

    @property
    def status(self) -> str:
        if self.history and self.history[-1].is_correct:
            return WON
        if len(self.history) >= MAXIMUM_GUESSES:
            return LOST
        return IN_PROGRESS

    def to_dict(self):
        return {
            'history': [outcome.to_dict() for outcome in self.history],
            'answer': self.answer,
            'status': self.status,
        }


def classify(guess: str, answer: str) -> GuessOutcome:
    """Classify each letter of ``guess`` against ``answer``.

    Each position is judged on its own against the whole answer, with no
    bookkeeping of letters already matched: a letter that appears once in
    the answer can be marked misplaced at several positions.
    """
    letters = []
    for i, c in enumerate(guess):
        if i < len(answer) and answer[i] == c:
            classification = Classification.CORRECT
        elif c in answer:
            classification = Classification.MISPLACED
        else:
            classification = Classification.NOT_FOUND
        letters.append(Letter(value=c, classification=classification))
    return GuessOutcome(letters=tuple(letters))


class WordGuess(GameEngine[WordGuessState, str]):
    kind = 'word_guess'

    def __init__(self, answer: str):
        self.answer = answer.lower()

    def new_state(self, puzzle=None) -> WordGuessState:
        return WordGuessState(history=(), answer=self.answer)

    def clean(self, state: WordGuessState, raw) -> str:
        if not isinstance(raw, str):
            raise ValidationError("Guess must be a string")
        guess = raw.strip().lower()
        if len(guess) != WORD_LENGTH:
            raise ValidationError(f"Guess must be exactly {WORD_LENGTH} letters")
        status = state.status
        if status == WON:
            raise GameOver()
        if status == LOST:
            raise MaximumGuesses()
        if not guess.isalpha():
            raise InvalidGuess("Guess may only contain letters")
        if any(outcome.word == guess for outcome in state.history):
            raise DuplicateGuess()
        return guess

    def apply(self, state: WordGuessState, guess: str):
        outcome = classify(guess, state.answer)
        return replace(state, history=state.history + (outcome,)), outcome

    def present(self, state: WordGuessState) -> dict:
        data = state.to_dict()
        if state.status == IN_PROGRESS:
            data.pop('answer')
        return data

    def load_state(self, data, puzzle=None) -> WordGuessState:
        answer = data['answer']
        if not isinstance(answer, str) or len(answer) != WORD_LENGTH or not answer.isalpha():
            raise ValueError(f"stored answer {answer!r} is not a five-letter word")
        history = []
        for outcome in data['history']:
            letters = tuple(
                Letter(value=item['value'], classification=Classification(item['classification']))
                for item in outcome['letters']
            )
            history.append(GuessOutcome(letters=letters))
        return WordGuessState(history=tuple(history), answer=answer)
