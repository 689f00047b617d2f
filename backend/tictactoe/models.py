from tictactoe import bcrypt
from dataclasses import dataclass
from typing import Dict, List, Optional
import time

BOARD_SIZE = 9
MAX_PLAYERS = 2
SYMBOLS = ('X', 'O')
DRAW = 'Draw'

# Room status values, as sent to clients
WAITING = 'waiting'   # one member, waiting for an opponent
PLAYING = 'playing'   # two members, game in progress
ENDED = 'ended'       # win or draw reached, rematch voting open


def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode('utf-8')


def empty_board() -> List[Optional[str]]:
    return [None] * BOARD_SIZE


@dataclass
class Player:
    id: str
    name: str
    symbol: str

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'symbol': self.symbol,
        }


class Room:
    """One match instance, addressed by its canonical uppercase name.

    Rooms are only mutated through the session engine in
    ``tictactoe.services.rooms.session``.
    """

    def __init__(self, name: str, creator: Player, password: Optional[str] = None):
        self.name = name
        self.players: List[Player] = [creator]
        self.board = empty_board()
        self.current_player_index = 0
        self.status = WAITING
        self.winner: Optional[str] = None
        self.scores: Dict[str, int] = {creator.id: 0}
        self.reset_votes: List[str] = []
        self.password_hash: Optional[str] = None
        self.last_activity = time.monotonic()
        if password:
            self.set_password(password)

    @property
    def is_private(self) -> bool:
        return self.password_hash is not None

    def set_password(self, password):
        self.password_hash = hash_password(password)

    def check_password(self, password):
        if self.password_hash is None:
            return True
        if not password:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    def find_player(self, sid: str) -> Optional[Player]:
        for p in self.players:
            if p.id == sid:
                return p
        return None

    def has_member(self, sid: str) -> bool:
        return self.find_player(sid) is not None

    def member_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def touch(self) -> None:
        self.last_activity = time.monotonic()

    def to_summary(self):
        return {
            'name': self.name,
            'players': len(self.players),
            'isPrivate': self.is_private,
            'status': self.status,
        }

    def to_dict(self):
        # The password hash never leaves the server
        return {
            'name': self.name,
            'players': [p.to_dict() for p in self.players],
            'board': list(self.board),
            'currentPlayerIndex': self.current_player_index,
            'isPrivate': self.is_private,
            'status': self.status,
            'winner': self.winner,
            'scores': dict(self.scores),
            'resetVotes': list(self.reset_votes),
        }
