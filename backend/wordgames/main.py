from flask import Blueprint, jsonify

from wordgames.games import GAME_KINDS

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the word games server!', 'games': list(GAME_KINDS)})
