"""Errors surfaced to the connection that sent the offending request.

The message of each error is the exact text emitted to the client.
"""


class RoomError(Exception):
    message = 'Room error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NameConflict(RoomError):
    message = 'Room ID already exists'


class RoomNotFound(RoomError):
    message = 'Room ID not found'


class RoomFull(RoomError):
    message = 'Room is full'


class PasswordRequired(RoomError):
    message = 'Password required'


class IncorrectPassword(RoomError):
    message = 'Incorrect password'
