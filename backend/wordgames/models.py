from datetime import datetime, timezone

from wordgames import db


def _utcnow():
    return datetime.now(timezone.utc)


class PlayerSession(db.Model):
    """One anonymous player: stable id, current validator hash, game blob."""
    __tablename__ = 'sessions'
    stable_id = db.Column(db.String(128), primary_key=True)
    validator = db.Column(db.String(128), nullable=False)  # bcrypt hash
    game_status = db.Column(db.Text, nullable=False, default='{}')  # JSON: game_kind -> state
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class PuzzleCache(db.Model):
    """Fetched GroupThem puzzles, one row per puzzle date."""
    __tablename__ = 'puzzle_cache'
    puzzle_date = db.Column(db.String(10), primary_key=True)  # ISO date
    payload = db.Column(db.Text, nullable=False)  # JSON, see Puzzle.to_dict
    fetched_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
