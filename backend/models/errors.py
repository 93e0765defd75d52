"""
Join errors for the chat hub.
Each error carries the message shown to the client in a join-error event.
"""


class JoinError(Exception):
    """Base class for failed join attempts"""

    message = "Unable to join."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidNameError(JoinError):
    message = "Username must be 1-15 characters."


class NameTakenError(JoinError):
    message = "Username is taken."


class AlreadyJoinedError(JoinError):
    message = "You have already joined."
