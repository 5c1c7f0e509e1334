"""Static puzzle vocabulary.

The catalog is loaded once when the app is created and never mutated.
Words handed out to the engines are value copies: each carries its own
``Group`` so nothing points back into the catalog.
"""

import json
import random
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import coloraide

from wordgames.errors import InvalidGuess

DEFAULT_CATALOG_PATH = Path(__file__).parent / 'data' / 'catalog.json'

# Every GroupThem puzzle is four groups of four distinct words
GROUPS = 4
ITEMS_PER_GROUP = 4


class Ranking(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'
    VERY_DIFFICULT = 'very_difficult'

    @classmethod
    def from_index(cls, index: int) -> 'Ranking':
        order = [cls.EASY, cls.MEDIUM, cls.HARD]
        return order[index] if 0 <= index < len(order) else cls.VERY_DIFFICULT

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return _RANKING_RGB[self]


_RANKING_RGB = {
    Ranking.EASY: (0.0, 0.8, 0.0),
    Ranking.MEDIUM: (0.0, 0.0, 0.8),
    Ranking.HARD: (0.8, 0.0, 0.0),
    Ranking.VERY_DIFFICULT: (0.8, 0.8, 0.8),
}


@dataclass(frozen=True)
class Group:
    name: str
    ranking: Ranking

    def to_dict(self):
        return {'name': self.name, 'ranking': self.ranking.value}


@dataclass(frozen=True)
class Word:
    text: str
    group: Group

    def to_json(self) -> str:
        # Group metadata is stripped; it is restored from the catalog on load
        return self.text


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def to_dict(self):
        return {'red': self.red, 'green': self.green, 'blue': self.blue}

    @classmethod
    def from_dict(cls, data) -> 'Color':
        return cls(red=int(data['red']), green=int(data['green']), blue=int(data['blue']))


def mix_colors(words: Iterable[Word], rng: Optional[random.Random] = None) -> Color:
    """Blend the ranking colours of ``words`` into one decorative colour.

    Each step moves the running colour towards the next word's colour by a
    random factor in [0.2, 0.5), interpolating in Lch. Pass a seeded ``rng``
    for repeatable output.
    """
    rng = rng or random.Random()
    colors = [coloraide.Color('srgb', list(word.group.ranking.rgb)) for word in words]
    if not colors:
        return Color(0, 0, 0)
    current = colors.pop()
    for other in colors:
        factor = rng.uniform(0.2, 0.5)
        current = current.mix(other, factor, space='lch')
    current = current.convert('srgb').fit('srgb')
    red, green, blue = (int(round(current[i] * 255)) for i in range(3))
    return Color(red, green, blue)


def normalize(text: str) -> str:
    return text.strip().lower()


@dataclass(frozen=True)
class Puzzle:
    """One GroupThem puzzle: its groups and the sixteen words to sort."""

    groups: Tuple[Group, ...]
    words: Tuple[Word, ...]

    def lookup(self, text: str) -> Word:
        """Return the canonical word for ``text`` or raise ``InvalidGuess``."""
        word = self._index.get(normalize(text))
        if word is None:
            raise InvalidGuess(f"`{text}` is not a valid word")
        return word

    def __contains__(self, text) -> bool:
        return normalize(text) in self._index

    @cached_property
    def _index(self) -> Dict[str, Word]:
        return {w.text: w for w in self.words}

    def to_dict(self):
        return {
            'groups': [g.to_dict() for g in self.groups],
            'words': [{'text': w.text, 'group': w.group.name} for w in self.words],
        }

    @classmethod
    def from_dict(cls, data) -> 'Puzzle':
        groups = tuple(Group(name=g['name'], ranking=Ranking(g['ranking'])) for g in data['groups'])
        by_name = {g.name: g for g in groups}
        words = []
        for item in data['words']:
            group = by_name.get(item['group'])
            if group is None:
                raise ValueError(f"word {item['text']!r} references unknown group {item['group']!r}")
            words.append(Word(text=normalize(item['text']), group=group))
        check_shape(groups, words)
        return cls(groups=groups, words=tuple(words))


def check_shape(groups, words):
    """Raise ``ValueError`` unless there are four groups of four distinct words."""
    if len(groups) != GROUPS or len({g.name for g in groups}) != GROUPS:
        raise ValueError(f"expected {GROUPS} distinct groups, got {len(groups)}")
    texts = [w.text for w in words]
    if len(set(texts)) != len(texts):
        raise ValueError("puzzle words must be unique")
    for group in groups:
        size = sum(1 for w in words if w.group == group)
        if size != ITEMS_PER_GROUP:
            raise ValueError(f"group {group.name!r} has {size} words, expected {ITEMS_PER_GROUP}")


@dataclass(frozen=True)
class Catalog:
    """Process-wide puzzle data: the WordGuess answer and a GroupThem puzzle."""

    answer: str
    puzzle: Puzzle

    @classmethod
    def from_dict(cls, data) -> 'Catalog':
        answer = normalize(data['answer'])
        if len(answer) != 5 or not answer.isalpha():
            raise ValueError(f"catalog answer must be five letters, got {answer!r}")
        return cls(answer=answer, puzzle=Puzzle.from_dict(data))


def load_catalog(path=None) -> Catalog:
    path = Path(path) if path else DEFAULT_CATALOG_PATH
    with path.open(encoding='utf-8') as fh:
        return Catalog.from_dict(json.load(fh))
