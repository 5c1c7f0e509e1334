import random

import click
from flask import Flask, jsonify
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Puzzle data and engines are built once and shared read-only by all requests
    from wordgames.catalog import load_catalog
    from wordgames.games import build_engines
    from wordgames.services.puzzles import build_provider
    from wordgames.services.sessions import SessionStore

    catalog = load_catalog(flask_app.config.get('CATALOG_PATH'))
    seed = flask_app.config.get('COLOR_SEED')
    engines = build_engines(catalog, rng=random.Random(seed) if seed is not None else None)
    flask_app.extensions['wordgames.catalog'] = catalog
    flask_app.extensions['wordgames.engines'] = engines
    flask_app.extensions['wordgames.store'] = SessionStore(engines)
    flask_app.extensions['wordgames.provider'] = build_provider(flask_app.config, catalog)

    # Import and register blueprints here
    from wordgames.main import main
    flask_app.register_blueprint(main)

    from wordgames.api.games import games
    flask_app.register_blueprint(games)

    # Every request resolves to a session: the one its cookies prove, or a new one
    from wordgames.services.tokens import load_identity_from_request

    @login_manager.request_loader
    def load_identity(req):
        return load_identity_from_request(req)

    @flask_app.errorhandler(413)
    def payload_too_large(_exc):
        return jsonify({'error': 'Request body too large'}), 413

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates every table, removing all sessions and cached puzzles."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('sessions-reset')
    def sessions_reset_command():
        """Deletes every stored session, keeping cached puzzles."""
        from wordgames.services import get_store
        with flask_app.app_context():
            removed = get_store().reset()
            print(f'Removed {removed} session(s).')

    @click.command('sessions-count')
    def sessions_count_command():
        """Prints how many sessions are stored."""
        from wordgames.services import get_store
        with flask_app.app_context():
            print(f'{get_store().count()} session(s) stored.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(sessions_reset_command)
    flask_app.cli.add_command(sessions_count_command)

    flask_app.logger.info(
        f"[startup] provider={flask_app.config.get('GROUPTHEM_PROVIDER', 'catalog')} "
        f"strict_credentials={bool(flask_app.config.get('STRICT_CREDENTIALS'))}"
    )
    return flask_app
