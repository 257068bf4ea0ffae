class RoomError(Exception):
    """Caller-recoverable room failure, reported back through the ack."""

    message = 'Room error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class RoomNotFound(RoomError):
    message = 'Room not found'


class InvalidRating(RoomError):
    message = 'Invalid rating'


class Forbidden(RoomError):
    def __init__(self, action: str):
        super().__init__(f'Only creator can {action}')
