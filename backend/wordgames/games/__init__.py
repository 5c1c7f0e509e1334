"""Puzzle engines, keyed by the game-kind tag stored with each session.

Engines are pure: they take a state value and return a new one. Storage and
HTTP concerns live in ``wordgames.services`` and ``wordgames.api``.
"""

from wordgames.games.groupthem import GroupThem
from wordgames.games.wordguess import WordGuess

GAME_KINDS = (WordGuess.kind, GroupThem.kind)


def build_engines(catalog, rng=None):
    return {
        WordGuess.kind: WordGuess(catalog.answer),
        GroupThem.kind: GroupThem(rng=rng),
    }
