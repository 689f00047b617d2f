from flask import current_app, request
from typing import Any, Optional

from tictactoe.models import hash_password
from tictactoe.services.rooms import session
from tictactoe.services.rooms.errors import RoomError
from tictactoe.services.rooms.notifier import Notifier
from tictactoe.services.rooms.registry import ConnectionRegistry
from tictactoe.services.rooms.store import RoomStore


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _clean_name(value: Any, max_length: int) -> str:
    if not isinstance(value, str):
        return ''
    return value.strip()[:max_length]


def _room_id(data: Any) -> Optional[str]:
    # reset-game and leave-room send the bare room id; other events send an object
    if isinstance(data, dict):
        data = data.get('roomId')
    if isinstance(data, str) and data.strip():
        return data
    return None


class GameRouter:
    """Binds inbound Socket.IO events to the session engine.

    Each handler holds ``store.lock`` across the mutation and the
    notifications it produces, so events for the same room never
    interleave.
    """

    def __init__(self, socketio, namespace: str = '/', max_name_length: int = 32):
        self.store = RoomStore(max_name_length=max_name_length)
        self.registry = ConnectionRegistry()
        self.notifier = Notifier(socketio, self.store, self.registry, namespace=namespace)
        self.max_name_length = max_name_length

    def _error(self, sid: str, message: str) -> None:
        self.notifier.send('error', message, sid)

    def handle_connect(self, auth=None):
        sid = _get_sid()
        with self.store.lock:
            self.registry.on_connect(sid)
            self.notifier.send_directory(sid)
        current_app.logger.info(f"[connect] sid={sid}")

    def handle_disconnect(self, reason=None):
        sid = _get_sid()
        with self.store.lock:
            tracked = self.registry.on_disconnect(sid)
            # Scan every room rather than trusting the registry's bookkeeping
            rooms = self.store.rooms_with_member(sid)
            seated = {room.name for room in rooms}
            if seated != tracked:
                current_app.logger.warning(
                    f"[registry-mismatch] sid={sid} tracked={sorted(tracked)} seated={sorted(seated)}"
                )
            for room in rooms:
                change = session.depart(self.store, room, sid)
                if change.room is not None:
                    self.notifier.publish_room(change.room)
                current_app.logger.info(
                    f"[depart] room={change.room_name} sid={sid} deleted={change.deleted}"
                )
            self.notifier.broadcast_directory()
        current_app.logger.info(f"[disconnect] sid={sid}")

    def handle_create_room(self, data):
        sid = _get_sid()
        data = data if isinstance(data, dict) else {}
        room_name = _clean_name(data.get('roomName'), self.max_name_length)
        player_name = _clean_name(data.get('playerName'), self.max_name_length)
        if not room_name or not player_name:
            self._error(sid, 'Missing Name or Room Name')
            return
        password = data.get('password') if isinstance(data.get('password'), str) else None
        is_private = bool(data.get('isPrivate'))
        # Hash before taking the store lock
        password_hash = hash_password(password) if is_private and password else None

        with self.store.lock:
            try:
                room = self.store.create(
                    room_name, sid, player_name,
                    is_private=is_private, password_hash=password_hash,
                )
            except RoomError as exc:
                self._error(sid, exc.message)
                return
            self.registry.attach(sid, room.name)
            self.notifier.send('room-created', room.to_dict(), sid)
            self.notifier.broadcast_directory()
        current_app.logger.info(
            f"[room-created] room={room.name} by={player_name} private={room.is_private}"
        )

    def handle_join_room(self, data):
        sid = _get_sid()
        data = data if isinstance(data, dict) else {}
        room_id = _room_id(data)
        player_name = _clean_name(data.get('playerName'), self.max_name_length)
        if not room_id or not player_name:
            self._error(sid, 'Missing Name or Room ID')
            return
        password = data.get('password') if isinstance(data.get('password'), str) else None

        with self.store.lock:
            try:
                room = self.store.get(room_id)
                change = session.admit(
                    room, sid, player_name,
                    password=password,
                    bypass_password_check=bool(data.get('isLinkJoin')),
                )
            except RoomError as exc:
                self._error(sid, exc.message)
                current_app.logger.info(f"[join-rejected] room={self.store.key(room_id)} reason={exc.message}")
                return
            self.registry.attach(sid, room.name)
            if not change.accepted:
                # Already seated: resend the current state to the requester only
                self.notifier.send('room-updated', room.to_dict(), sid)
                return
            self.notifier.publish(change)
        current_app.logger.info(f"[room-joined] room={room.name} by={player_name} status={room.status}")

    def handle_make_move(self, data):
        sid = _get_sid()
        if not isinstance(data, dict):
            return
        room_id = _room_id(data)
        if room_id is None:
            return
        index = data.get('index')
        with self.store.lock:
            room = self.store.find(room_id)
            if room is None:
                return
            change = session.apply_move(room, sid, index)
            self.notifier.publish(change)
        if change.accepted and change.directory_changed:
            current_app.logger.info(f"[game-over] room={room.name} winner={room.winner}")

    def handle_reset_game(self, data):
        sid = _get_sid()
        room_id = _room_id(data)
        if room_id is None:
            return
        with self.store.lock:
            room = self.store.find(room_id)
            change = session.vote_reset(room, sid)
            self.notifier.publish(change)
        if change.accepted and change.directory_changed:
            current_app.logger.info(f"[rematch] room={change.room_name}")

    def handle_leave_room(self, data):
        sid = _get_sid()
        room_id = _room_id(data)
        if room_id is None:
            return
        with self.store.lock:
            room = self.store.find(room_id)
            if room is None:
                return
            change = session.depart(self.store, room, sid)
            if not change.accepted:
                return
            self.registry.detach(sid, change.room_name)
            self.notifier.send('room-left', {'name': change.room_name}, sid)
            self.notifier.publish(change)
        current_app.logger.info(f"[room-left] room={change.room_name} sid={sid} deleted={change.deleted}")


def register_socketio_handlers(socketio, router: GameRouter, namespace: str = '/') -> None:
    """Register Socket.IO event handlers bound to ``router``.

    Must run after ``socketio.init_app`` so handlers bind to the new server.
    ``socketio`` is module-level and ``create_app`` may run many times (once
    per test), so entries queued for an earlier app are dropped first.
    """
    handlers = {
        'connect': router.handle_connect,
        'disconnect': router.handle_disconnect,
        'create-room': router.handle_create_room,
        'join-room': router.handle_join_room,
        'make-move': router.handle_make_move,
        'reset-game': router.handle_reset_game,
        'leave-room': router.handle_leave_room,
    }
    socketio.handlers[:] = [
        h for h in socketio.handlers
        if not (h[0] in handlers and h[2] == namespace)
    ]
    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace=namespace)
