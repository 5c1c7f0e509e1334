"""Session, credential and puzzle services.

Routes reach the per-app instances through these helpers so that tests can
build apps with their own catalog, engines and provider.
"""

from flask import current_app


def get_catalog():
    return current_app.extensions['wordgames.catalog']


def get_engine(game_kind):
    return current_app.extensions['wordgames.engines'][game_kind]


def get_store():
    return current_app.extensions['wordgames.store']


def get_provider():
    return current_app.extensions['wordgames.provider']
