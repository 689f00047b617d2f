from flask import Blueprint, jsonify, current_app
from tictactoe.services.rooms.errors import RoomNotFound

rooms = Blueprint('rooms', __name__)


def _router():
    return current_app.extensions['tictactoe']


@rooms.route('', methods=['GET'])
def list_rooms():
    """
    Returns the room directory, the same list pushed to sockets as 'room-list'.
    """
    router = _router()
    with router.store.lock:
        return jsonify(router.store.list())


@rooms.route('/<string:room_name>', methods=['GET'])
def get_room(room_name):
    """
    Returns the public summary of one room. Link-join pages use it to decide
    whether a password prompt is needed.
    """
    router = _router()
    with router.store.lock:
        try:
            room = router.store.get(room_name)
        except RoomNotFound as exc:
            return jsonify({'error': exc.message}), 404
        return jsonify(room.to_summary())
