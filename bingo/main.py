from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({
        'message': 'Welcome to the bingo game server!',
        'active_rooms': len(current_app.extensions['bingo_rooms']),
    })
