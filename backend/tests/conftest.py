import os
import random
import sys
import pytest

# Ensure the backend root (containing the `wordgames` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from wordgames import create_app, db
from wordgames.catalog import Puzzle
from wordgames.games.groupthem import GroupThem
from wordgames.games.wordguess import WordGuess
from puzzle_fixtures import DESSERTS_PUZZLE


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    BCRYPT_LOG_ROUNDS = 4
    GROUPTHEM_PROVIDER = 'catalog'
    STRICT_CREDENTIALS = False
    COLOR_SEED = 7
    CATALOG_PATH = None


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import wordgames.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def http_app():
    # Each request pushes its own app context, so nothing is cached between them
    application = create_app(TestConfig)
    with application.app_context():
        import wordgames.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(http_app):
    return http_app.test_client()


@pytest.fixture()
def puzzle():
    return Puzzle.from_dict(DESSERTS_PUZZLE)


@pytest.fixture()
def group_them():
    return GroupThem(rng=random.Random(42))


@pytest.fixture()
def word_guess():
    return WordGuess('orate')
