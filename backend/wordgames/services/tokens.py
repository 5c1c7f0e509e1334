"""Anonymous session credentials.

A caller is identified by a permanent ``stable_id`` plus a single-use
``validator``. Every mutation rotates the validator; only a bcrypt hash of
the current one is stored, so an old validator stops matching the moment
the new hash is committed.
"""

import secrets
from dataclasses import dataclass, field
from typing import Optional, Tuple

from flask import current_app
from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError

from wordgames import bcrypt
from wordgames.errors import CredentialMismatch, PersistenceError
from wordgames.models import PlayerSession


@dataclass
class Identity(UserMixin):
    stable_id: str
    # Hash read at resolve time; the commit only succeeds while it is still current
    validator_hash: Optional[str] = None
    game_status: str = field(default='{}', repr=False)

    @property
    def is_new(self) -> bool:
        return self.validator_hash is None

    def get_id(self):
        return self.stable_id


def new_token() -> str:
    return secrets.token_urlsafe(int(current_app.config.get('TOKEN_BYTES', 32)))


def hash_validator(validator: str) -> str:
    return bcrypt.generate_password_hash(validator).decode('utf-8')


def rotate() -> Tuple[str, str]:
    """Mint a new validator. Returns ``(validator, validator_hash)``."""
    validator = new_token()
    return validator, hash_validator(validator)


def new_identity() -> Identity:
    return Identity(stable_id=new_token())


def resolve(stable_id: Optional[str], validator: Optional[str]) -> Identity:
    """Return the session the credentials prove, or a brand-new identity.

    Missing, unknown or stale credentials start a new session silently,
    unless ``STRICT_CREDENTIALS`` is set, in which case a presented pair
    that does not match raises ``CredentialMismatch``.
    """
    if not (stable_id and validator):
        return new_identity()

    try:
        row = PlayerSession.query.filter_by(stable_id=stable_id).first()
    except SQLAlchemyError as exc:
        raise PersistenceError(str(exc)) from exc

    if row and bcrypt.check_password_hash(row.validator, validator):
        return Identity(stable_id=row.stable_id, validator_hash=row.validator, game_status=row.game_status)

    current_app.logger.info(
        f"[auth-mismatch] stable_id={stable_id[:8]}... known={row is not None}"
    )
    if current_app.config.get('STRICT_CREDENTIALS'):
        raise CredentialMismatch()
    return new_identity()


def load_identity_from_request(request) -> Identity:
    cfg = current_app.config
    return resolve(
        request.cookies.get(cfg['STALE_TOKEN_COOKIE']),
        request.cookies.get(cfg['FRESH_TOKEN_COOKIE']),
    )
