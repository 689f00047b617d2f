"""Room lifecycle: admission, turn taking, rematch voting and departure.

Every operation mutates a single room and returns a :class:`Change`
describing what the transport layer has to publish. Invalid moves and
stale votes return ``Change.ignored`` instead of raising.
"""

from dataclasses import dataclass
from typing import Optional

from tictactoe.models import (
    DRAW, ENDED, MAX_PLAYERS, PLAYING, SYMBOLS, WAITING, Player, Room, empty_board,
)
from .board import check_winner, is_valid_index
from .errors import IncorrectPassword, PasswordRequired, RoomFull
from .store import RoomStore


@dataclass
class Change:
    room: Optional[Room]
    room_name: str
    directory_changed: bool = False
    deleted: bool = False
    accepted: bool = True

    @classmethod
    def ignored(cls, room: Optional[Room], room_name: str = ''):
        return cls(room=room, room_name=room.name if room else room_name, accepted=False)


def _reset_game(room: Room) -> None:
    room.board = empty_board()
    room.current_player_index = 0
    room.winner = None
    room.reset_votes = []


def _next_symbol(room: Room) -> str:
    taken = {p.symbol for p in room.players}
    for symbol in SYMBOLS:
        if symbol not in taken:
            return symbol
    raise RoomFull()


def admit(room: Room, sid: str, display_name: str,
          password: Optional[str] = None, bypass_password_check: bool = False) -> Change:
    if room.has_member(sid):
        return Change.ignored(room)
    if len(room.players) >= MAX_PLAYERS:
        raise RoomFull()
    if room.is_private and not bypass_password_check:
        if not password:
            raise PasswordRequired()
        if not room.check_password(password):
            raise IncorrectPassword()

    room.players.append(Player(id=sid, name=display_name, symbol=_next_symbol(room)))
    room.scores[sid] = 0
    if len(room.players) == MAX_PLAYERS:
        _reset_game(room)
        room.status = PLAYING
    room.touch()
    return Change(room=room, room_name=room.name, directory_changed=True)


def apply_move(room: Room, sid: str, index) -> Change:
    if room.status != PLAYING:
        return Change.ignored(room)
    player = room.players[room.current_player_index]
    if player.id != sid:
        return Change.ignored(room)
    if not is_valid_index(index) or room.board[index] is not None:
        return Change.ignored(room)

    room.board[index] = player.symbol
    room.touch()
    result = check_winner(room.board)
    if result is None:
        room.current_player_index = 1 - room.current_player_index
        return Change(room=room, room_name=room.name)

    room.status = ENDED
    if result == DRAW:
        room.winner = DRAW
    else:
        room.winner = player.name
        room.scores[player.id] = room.scores.get(player.id, 0) + 1
    return Change(room=room, room_name=room.name, directory_changed=True)


def vote_reset(room: Optional[Room], sid: str) -> Change:
    if room is None or not room.has_member(sid) or room.status != ENDED:
        return Change.ignored(room)

    if sid not in room.reset_votes:
        room.reset_votes.append(sid)
    room.touch()
    if len(room.reset_votes) < len(room.players):
        return Change(room=room, room_name=room.name)

    _reset_game(room)
    room.status = PLAYING
    return Change(room=room, room_name=room.name, directory_changed=True)


def depart(store: RoomStore, room: Room, sid: str) -> Change:
    player = room.find_player(sid)
    if player is None:
        return Change.ignored(room)

    room.players.remove(player)
    if not room.players:
        store.delete(room.name)
        return Change(room=None, room_name=room.name, directory_changed=True, deleted=True)

    _reset_game(room)
    room.status = WAITING
    room.touch()
    return Change(room=room, room_name=room.name, directory_changed=True)
