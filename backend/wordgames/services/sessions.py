"""Per-session game state persistence.

Each session row holds one JSON object mapping game kind to serialized
state. A commit rewrites the whole object, so it is guarded by a
compare-and-swap on the validator hash read when the identity was resolved:
if another request committed in between, the write is refused with
``StaleSessionError`` instead of silently discarding that request's work.
"""

import json

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from wordgames import db
from wordgames.errors import CorruptedStateError, InvalidGuess, PersistenceError, StaleSessionError
from wordgames.models import PlayerSession
from wordgames.services import tokens


def decode_status(raw):
    """Parse a stored blob into a ``{game_kind: dict}`` mapping."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise CorruptedStateError(f"Unable to parse game status: {exc}") from exc
    if not isinstance(data, dict):
        raise CorruptedStateError("Unable to parse game status: expected an object")
    return data


class SessionStore:
    def __init__(self, engines):
        self.engines = engines

    def load(self, identity, game_kind, puzzle=None):
        """Return the stored state for ``game_kind`` or a fresh zero state."""
        engine = self.engines[game_kind]
        slot = decode_status(identity.game_status).get(game_kind)
        if slot is None:
            return engine.new_state(puzzle)
        try:
            return engine.load_state(slot, puzzle)
        except (KeyError, TypeError, ValueError, InvalidGuess) as exc:
            raise CorruptedStateError(f"Unable to parse {game_kind} state: {exc}") from exc

    def commit(self, identity, game_kind, new_state):
        """Persist ``new_state`` and return the freshly rotated validator."""
        status_map = decode_status(identity.game_status)
        status_map[game_kind] = self.engines[game_kind].dump_state(new_state)
        blob = json.dumps(status_map)
        validator, validator_hash = tokens.rotate()

        try:
            if identity.is_new:
                db.session.add(PlayerSession(
                    stable_id=identity.stable_id,
                    validator=validator_hash,
                    game_status=blob,
                ))
                db.session.commit()
            else:
                updated = PlayerSession.query.filter_by(
                    stable_id=identity.stable_id,
                    validator=identity.validator_hash,
                ).update({'validator': validator_hash, 'game_status': blob}, synchronize_session=False)
                if updated != 1:
                    db.session.rollback()
                    current_app.logger.warning(
                        f"[commit-stale] stable_id={identity.stable_id[:8]}... kind={game_kind}"
                    )
                    raise StaleSessionError(identity.stable_id)
                db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise StaleSessionError(identity.stable_id) from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"[commit-failed] kind={game_kind} error={exc}")
            raise PersistenceError(str(exc)) from exc

        # The identity now reflects what is stored, so a second commit in the
        # same request chains from this one
        identity.validator_hash = validator_hash
        identity.game_status = blob
        current_app.logger.info(f"[commit] stable_id={identity.stable_id[:8]}... kind={game_kind}")
        return validator

    def count(self):
        try:
            return PlayerSession.query.count()
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    def reset(self):
        """Delete every session row. Returns how many were removed."""
        try:
            removed = PlayerSession.query.delete()
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(str(exc)) from exc
        current_app.logger.warning(f"[sessions-reset] removed={removed}")
        return removed
