"""Where today's GroupThem puzzle comes from.

By default the packaged catalog supplies it. The remote provider scrapes a
public answers page for a given day; results are cached in the database per
puzzle date, and a failed fetch never replaces a cached puzzle.
"""

import hashlib
import html
import json
import re
from datetime import date, timedelta

import requests
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from wordgames import db
from wordgames.catalog import Group, Puzzle, Ranking, Word, check_shape, normalize
from wordgames.errors import ProviderError
from wordgames.models import PuzzleCache

MAX_DATE_OFFSET = 365
ANSWER_HEADING = '<h2 id=what-is-the-answer-to-connections-today>'
FONT_RE = re.compile(r'<font[^>]*>(.*?)</font>', re.S)


def clamp_offset(offset) -> int:
    return max(0, min(int(offset), MAX_DATE_OFFSET))


def puzzle_date(offset, today=None) -> date:
    return (today or date.today()) - timedelta(days=clamp_offset(offset))


class CatalogPuzzleProvider:
    """Serves the static catalog puzzle regardless of the day."""

    def __init__(self, catalog):
        self.catalog = catalog

    def get_puzzle(self, offset=0) -> Puzzle:
        return self.catalog.puzzle


def _strip_astral(text):
    # Emoji decorations on the source page live outside the BMP
    return ''.join(c for c in text if ord(c) <= 0xFFFF)


def _stable_order(word):
    return hashlib.sha256(word.text.encode('utf-8')).hexdigest()


def parse_answer_page(page) -> Puzzle:
    """Extract four groups of four words from an answers page."""
    try:
        section = page.split(ANSWER_HEADING, 1)[1]
        start = section.index('<ul>')
        end = section.index('</ul>', start)
    except (IndexError, ValueError) as exc:
        raise ProviderError("Puzzle page layout not recognised") from exc

    groups, words = [], []
    for i, match in enumerate(FONT_RE.finditer(section[start:end])):
        # The page no longer names its groups; rankings follow listing order
        group = Group(name=f"group {i + 1}", ranking=Ranking.from_index(i))
        groups.append(group)
        for item in _strip_astral(match.group(1)).split(','):
            text = normalize(html.unescape(item))
            if text:
                words.append(Word(text=text, group=group))

    try:
        check_shape(groups, words)
    except ValueError as exc:
        raise ProviderError(f"Unexpected puzzle on page: {exc}") from exc
    # Shuffle deterministically so groups are not listed together
    words.sort(key=_stable_order)
    return Puzzle(groups=tuple(groups), words=tuple(words))


class RemotePuzzleProvider:
    def __init__(self, url_template, timeout=10):
        self.url_template = url_template
        self.timeout = timeout

    def url_for(self, day: date) -> str:
        # e.g. "march-7-2024"
        slug = f"{day.strftime('%B').lower()}-{day.day}-{day.year}"
        return self.url_template.format(date=slug)

    def fetch(self, day: date) -> Puzzle:
        url = self.url_for(day)
        current_app.logger.info(f"[puzzle-fetch] url={url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ProviderError(f"Failed to fetch puzzle: {exc}") from exc
        return parse_answer_page(response.text)

    def get_puzzle(self, offset=0) -> Puzzle:
        return self.fetch(puzzle_date(offset))


class CachedPuzzleProvider:
    """Database-backed cache in front of another provider, keyed by date."""

    def __init__(self, source):
        self.source = source

    def get_puzzle(self, offset=0) -> Puzzle:
        day = puzzle_date(offset)
        key = day.isoformat()
        try:
            row = db.session.get(PuzzleCache, key)
        except SQLAlchemyError as exc:
            current_app.logger.warning(f"[puzzle-cache] read failed date={key} error={exc}")
            row = None
        if row is not None:
            try:
                return Puzzle.from_dict(json.loads(row.payload))
            except (KeyError, TypeError, ValueError) as exc:
                current_app.logger.warning(f"[puzzle-cache] unreadable entry date={key} error={exc}")

        puzzle = self.source.fetch(day)
        self.store(key, puzzle)
        return puzzle

    def store(self, key, puzzle):
        # Concurrent first requests may both fetch; the write is an overwrite
        try:
            db.session.merge(PuzzleCache(puzzle_date=key, payload=json.dumps(puzzle.to_dict())))
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"[puzzle-cache] failed to save date={key} error={exc}")


def build_provider(config, catalog):
    kind = config.get('GROUPTHEM_PROVIDER', 'catalog')
    if kind == 'remote':
        return CachedPuzzleProvider(RemotePuzzleProvider(
            config['PUZZLE_SOURCE_URL'],
            timeout=int(config.get('PUZZLE_FETCH_TIMEOUT_SEC', 10)),
        ))
    if kind != 'catalog':
        raise ValueError(f"Unknown GROUPTHEM_PROVIDER {kind!r}")
    return CatalogPuzzleProvider(catalog)
