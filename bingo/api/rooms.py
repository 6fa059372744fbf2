from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:room_code>/state', methods=['GET'])
def room_state(room_code):
    room = current_app.extensions['bingo_rooms'].find(room_code)
    if not room:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(room.to_dict())
