"""GroupThem: sort sixteen words into four hidden groups of four.

A guess names four words. If they share a group the group is solved and the
words leave the board; otherwise it counts as a bad guess. Four solved
groups win the game, four bad guesses lose it.
"""

import random
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

from wordgames.catalog import GROUPS, ITEMS_PER_GROUP, Color, Puzzle, Word, mix_colors, normalize
from wordgames.errors import AlreadyUsedWord, DuplicateGuess, GameOver, InvalidGuess, MaximumGuesses, ValidationError
from wordgames.games.base import GameEngine, IN_PROGRESS, LOST, WON

MAXIMUM_BAD_GUESSES = 4


@dataclass(frozen=True)
class GroupOutcome:
    words: Tuple[Word, ...]
    complete: bool
    # Decorative only; never compared for correctness
    color: Color

    @property
    def texts(self) -> FrozenSet[str]:
        return frozenset(w.text for w in self.words)

    def to_dict(self):
        return {
            'words': [w.to_json() for w in self.words],
            'complete': self.complete,
            'color': self.color.to_dict(),
        }


@dataclass(frozen=True)
class GroupThemState:
    history: Tuple[GroupOutcome, ...]
    remaining: Tuple[Word, ...]

    @property
    def good_guesses(self) -> int:
        return sum(1 for g in self.history if g.complete)

    @property
    def bad_guesses(self) -> int:
        return sum(1 for g in self.history if not g.complete)

    @property
    def used_words(self) -> Tuple[Word, ...]:
        return tuple(w for g in self.history if g.complete for w in g.words)

    @property
    def status(self) -> str:
        if self.good_guesses >= GROUPS:
            return WON
        if self.bad_guesses >= MAXIMUM_BAD_GUESSES:
            return LOST
        return IN_PROGRESS

    def to_dict(self):
        return {
            'history': [g.to_dict() for g in self.history],
            'remaining': [w.to_json() for w in self.remaining],
            'status': self.status,
        }


class GroupThem(GameEngine[GroupThemState, Tuple[Word, ...]]):
    kind = 'group_them'

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def new_state(self, puzzle: Puzzle) -> GroupThemState:
        return GroupThemState(history=(), remaining=tuple(puzzle.words))

    def clean(self, state: GroupThemState, raw) -> Tuple[Word, ...]:
        if not isinstance(raw, (list, tuple)) or not all(isinstance(g, str) for g in raw):
            raise ValidationError("Guess must be a list of words")
        # Order-preserving dedupe so the outcome lists words as the player sent them
        texts = list(dict.fromkeys(normalize(g) for g in raw))
        if len(raw) != ITEMS_PER_GROUP or len(texts) != ITEMS_PER_GROUP:
            raise ValidationError(f"You have to guess {ITEMS_PER_GROUP} different words")

        status = state.status
        if status == WON:
            raise GameOver()
        if status == LOST:
            raise MaximumGuesses()

        known = {w.text: w for w in state.remaining + state.used_words}
        words = []
        for text in texts:
            if text not in known:
                raise InvalidGuess(f"`{text}` is not a valid word")
            words.append(known[text])

        used = {w.text for w in state.used_words}
        for text in texts:
            if text in used:
                raise AlreadyUsedWord(text)

        guessed = frozenset(texts)
        if any(outcome.texts == guessed for outcome in state.history):
            raise DuplicateGuess()
        return tuple(words)

    def apply(self, state: GroupThemState, words: Sequence[Word]):
        words = tuple(words)
        complete = all(w.group == words[0].group for w in words)
        if complete:
            guessed = {w.text for w in words}
            remaining = tuple(w for w in state.remaining if w.text not in guessed)
        else:
            remaining = state.remaining
        outcome = GroupOutcome(words=words, complete=complete, color=mix_colors(words, self.rng))
        return GroupThemState(history=state.history + (outcome,), remaining=remaining), outcome

    def load_state(self, data, puzzle: Puzzle) -> GroupThemState:
        history = tuple(
            GroupOutcome(
                words=tuple(puzzle.lookup(text) for text in item['words']),
                complete=bool(item['complete']),
                color=Color.from_dict(item['color']),
            )
            for item in data['history']
        )
        remaining = tuple(puzzle.lookup(text) for text in data['remaining'])
        return GroupThemState(history=history, remaining=remaining)
