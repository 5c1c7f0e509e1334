import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///database.sqlite'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Submit payloads are tiny; anything larger is rejected by Flask
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', '256'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    CORS_ORIGINS = [o for o in os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173').split(',') if o]

    # Credentials. bcrypt only reads the first 72 bytes, keep TOKEN_BYTES <= 48
    TOKEN_BYTES = int(os.environ.get('TOKEN_BYTES', '32'))
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '10'))
    STALE_TOKEN_COOKIE = os.environ.get('STALE_TOKEN_COOKIE', 'stale_token')
    FRESH_TOKEN_COOKIE = os.environ.get('FRESH_TOKEN_COOKIE', 'fresh_token')
    COOKIE_SECURE = os.environ.get('COOKIE_SECURE', '0') == '1'
    # Reject mismatched credentials with 401 instead of starting a new session
    STRICT_CREDENTIALS = os.environ.get('STRICT_CREDENTIALS', '0') == '1'

    # Puzzle data
    CATALOG_PATH = os.environ.get('CATALOG_PATH')  # None -> packaged catalog
    GROUPTHEM_PROVIDER = os.environ.get('GROUPTHEM_PROVIDER', 'catalog')  # catalog | remote
    GROUPTHEM_DATE_OFFSET = int(os.environ.get('GROUPTHEM_DATE_OFFSET', '1'))
    PUZZLE_SOURCE_URL = os.environ.get(
        'PUZZLE_SOURCE_URL',
        'https://www.connections-answer.com/posts/nyt-connections-answer-hint-{date}',
    )
    PUZZLE_FETCH_TIMEOUT_SEC = int(os.environ.get('PUZZLE_FETCH_TIMEOUT_SEC', '10'))
    # Optional: seed the cosmetic colour blending. Empty means unseeded.
    COLOR_SEED = int(os.environ['COLOR_SEED']) if os.environ.get('COLOR_SEED') else None
