import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class PresenceDirectory(ABC):
    """
    Maps a user id to the socket it is currently connected on. A user has
    at most one entry; a newer connection replaces the older one.
    """

    @abstractmethod
    def add(self, user_id: str, sid: str, user: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def remove(self, user_id: str, sid: Optional[str] = None) -> None:
        """Remove the entry. When `sid` is given, only if it is still the registered socket."""
        pass

    @abstractmethod
    def lookup(self, user_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def all(self) -> List[Dict[str, Any]]:
        pass

    def is_online(self, user_id: str) -> bool:
        return self.lookup(user_id) is not None


class InMemoryPresenceDirectory(PresenceDirectory):
    """Process local. Correct only while a single process serves all sockets."""

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def add(self, user_id: str, sid: str, user: Dict[str, Any]) -> None:
        with self._lock:
            self._entries[str(user_id)] = {"socketId": sid, "user": user}

    def remove(self, user_id: str, sid: Optional[str] = None) -> None:
        with self._lock:
            entry = self._entries.get(str(user_id))
            if entry is None:
                return
            if sid is not None and entry["socketId"] != sid:
                return
            del self._entries[str(user_id)]

    def lookup(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._entries.get(str(user_id))

    def all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._entries.values())
