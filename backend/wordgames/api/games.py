from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user
from pydantic import ValidationError as PayloadError

from wordgames.api.schemas import REQUEST_MODELS, GroupThemRequest, WordGuessRequest
from wordgames.errors import (
    CorruptedStateError,
    CredentialMismatch,
    GameError,
    GameOver,
    PersistenceError,
    ProviderError,
    StaleSessionError,
)
from wordgames.games.groupthem import GroupThem
from wordgames.games.wordguess import WordGuess
from wordgames.services import get_engine, get_provider, get_store

games = Blueprint('games', __name__)

# Stable ids are permanent, so the cookie outlives the browser session
COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def _puzzle_for(game_kind):
    if game_kind == GroupThem.kind:
        return get_provider().get_puzzle(current_app.config.get('GROUPTHEM_DATE_OFFSET', 1))
    return None


def _set_credential_cookies(response, stable_id, fresh_token):
    cfg = current_app.config
    for name, value in ((cfg['FRESH_TOKEN_COOKIE'], fresh_token), (cfg['STALE_TOKEN_COOKIE'], stable_id)):
        response.set_cookie(
            name,
            value,
            max_age=COOKIE_MAX_AGE,
            path='/',
            httponly=True,
            samesite='Lax',
            secure=bool(cfg.get('COOKIE_SECURE')),
        )


def _get_state(game_kind):
    # Reads never create a session row or rotate credentials
    identity = current_user._get_current_object()
    state = get_store().load(identity, game_kind, _puzzle_for(game_kind))
    return jsonify(get_engine(game_kind).present(state))


def _submit_guess(game_kind, request_model):
    try:
        payload = request_model.model_validate(request.get_json(silent=True) or {})
    except PayloadError as exc:
        details = [f"{'.'.join(str(p) for p in e['loc']) or 'body'}: {e['msg']}" for e in exc.errors()]
        return jsonify({'error': 'Invalid request', 'details': details}), 400

    identity = current_user._get_current_object()
    engine = get_engine(game_kind)
    store = get_store()
    state = store.load(identity, game_kind, _puzzle_for(game_kind))
    new_state = engine.guess(state, payload.guess)
    fresh_token = store.commit(identity, game_kind, new_state)
    current_app.logger.info(
        f"[guess] kind={game_kind} stable_id={identity.stable_id[:8]}... "
        f"guesses={len(new_state.history)} status={new_state.status}"
    )

    response = jsonify({'game_status': engine.present(new_state)})
    _set_credential_cookies(response, identity.stable_id, fresh_token)
    return response


@games.route('/wordguess', methods=['GET'])
def wordguess_get_state():
    return _get_state(WordGuess.kind)


@games.route('/wordguess', methods=['POST'])
def wordguess_game():
    return _submit_guess(WordGuess.kind, WordGuessRequest)


@games.route('/groupthem', methods=['GET'])
def groupthem_get_state():
    return _get_state(GroupThem.kind)


@games.route('/groupthem', methods=['POST'])
def groupthem_game():
    return _submit_guess(GroupThem.kind, GroupThemRequest)


@games.route('/<string:segment>/schema', methods=['GET'])
def get_schema(segment):
    model = REQUEST_MODELS.get(segment.lower())
    if model is None:
        return jsonify({'error': f'No game named {segment}'}), 404
    return jsonify(model.model_json_schema())


@games.errorhandler(GameError)
def handle_game_error(exc):
    if isinstance(exc, GameOver):
        return jsonify({'message': str(exc)}), 200
    return jsonify({'error': str(exc)}), 400


@games.errorhandler(CredentialMismatch)
def handle_credential_mismatch(exc):
    # Drop the rejected pair so the next request starts a new session
    response = jsonify({'error': str(exc)})
    cfg = current_app.config
    for name in (cfg['FRESH_TOKEN_COOKIE'], cfg['STALE_TOKEN_COOKIE']):
        response.delete_cookie(name, path='/', httponly=True, samesite='Lax', secure=bool(cfg.get('COOKIE_SECURE')))
    return response, 401


@games.errorhandler(StaleSessionError)
def handle_stale_session(exc):
    return jsonify({'error': str(exc)}), 409


@games.errorhandler(CorruptedStateError)
def handle_corrupted_state(exc):
    current_app.logger.error(f"[state-corrupted] {exc}")
    return jsonify({'error': f'Your game has been corrupted. Please wait for tomorrow: {exc}'}), 500


@games.errorhandler(PersistenceError)
def handle_persistence_error(exc):
    current_app.logger.error(f"[storage-unavailable] {exc}")
    return jsonify({'error': 'Storage is temporarily unavailable, please retry'}), 503


@games.errorhandler(ProviderError)
def handle_provider_error(exc):
    current_app.logger.error(f"[puzzle-unavailable] {exc}")
    return jsonify({'error': "Today's puzzle is unavailable, please try again later"}), 503
