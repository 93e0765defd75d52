"""
Presence registry for the chat hub.
Maps live Socket.IO connections to the display names they joined with.
"""

from typing import Dict, List, Optional

from .chat_models import User
from .errors import AlreadyJoinedError, InvalidNameError, NameTakenError


MAX_NAME_LENGTH = 15


class PresenceRegistry:
    """Joined users keyed by connection id, in join order"""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def join(self, connection_id: str, raw_name) -> User:
        """
        Register a user for a connection.

        The name is trimmed, must be 1-15 printable characters and must not
        match any joined user's name ignoring case.
        """
        if connection_id in self._users:
            raise AlreadyJoinedError()

        if not isinstance(raw_name, str):
            raise InvalidNameError()

        name = raw_name.strip()
        if not name or len(name) > MAX_NAME_LENGTH or not name.isprintable():
            raise InvalidNameError()

        folded = name.casefold()
        if any(user.name.casefold() == folded for user in self._users.values()):
            raise NameTakenError()

        user = User(id=connection_id, name=name)
        self._users[connection_id] = user
        return user

    def leave(self, connection_id: str) -> Optional[User]:
        return self._users.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[User]:
        return self._users.get(connection_id)

    def list_all(self) -> List[User]:
        return list(self._users.values())

    def __len__(self):
        return len(self._users)

    def __contains__(self, connection_id):
        return connection_id in self._users
