"""
In-memory message store.

Holds the chat messages exchanged through the API. Encrypted messages may
carry the parameters needed to decode them later; nothing is written to
disk and everything is lost on restart.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from .cipher import CascadeCipher
from .errors import RequestError

logger = logging.getLogger(__name__)


class Message:
    """One stored chat message."""

    __slots__ = ("id", "sender", "content", "is_encrypted", "cipher_key",
                 "start_number", "reverse_groups", "timestamp", "_seq")

    def __init__(self, sender: str, content: str, is_encrypted: bool = True,
                 cipher_key: Optional[str] = None,
                 start_number: Optional[int] = None,
                 reverse_groups: bool = False,
                 timestamp: Optional[datetime] = None,
                 id: Optional[str] = None):
        self.id             = id or uuid.uuid4().hex
        self.sender         = sender
        self.content        = content
        self.is_encrypted   = is_encrypted
        self.cipher_key     = cipher_key
        self.start_number   = start_number
        self.reverse_groups = reverse_groups
        self.timestamp      = timestamp or datetime.now(timezone.utc)
        self._seq           = 0

    @property
    def decodable(self) -> bool:
        return (self.is_encrypted and self.cipher_key is not None
                and self.start_number is not None)

    def to_dict(self) -> dict:
        return {
            "id":            self.id,
            "sender":        self.sender,
            "content":       self.content,
            "isEncrypted":   self.is_encrypted,
            "cipherKey":     self.cipher_key,
            "startNumber":   self.start_number,
            "reverseGroups": self.reverse_groups,
            "timestamp":     self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload) -> "Message":
        """Build a new message from a JSON-style payload (camelCase keys)."""
        if not isinstance(payload, dict):
            raise RequestError("body", "Request body must be a JSON object")

        fields = {}
        for name in ("sender", "content"):
            value = payload.get(name)
            if not isinstance(value, str) or not value:
                raise RequestError(name, f"{name} must be a non-empty string")
            fields[name] = value

        is_encrypted = payload.get("isEncrypted", True)
        if not isinstance(is_encrypted, bool):
            raise RequestError("isEncrypted", "isEncrypted must be a boolean")

        cipher_key = payload.get("cipherKey")
        if cipher_key is not None and not isinstance(cipher_key, str):
            raise RequestError("cipherKey", "cipherKey must be a string")

        start_number = payload.get("startNumber")
        if start_number is not None and (isinstance(start_number, bool)
                                         or not isinstance(start_number, int)):
            raise RequestError("startNumber", "startNumber must be an integer")

        reverse_groups = payload.get("reverseGroups", False)
        if not isinstance(reverse_groups, bool):
            raise RequestError("reverseGroups", "reverseGroups must be a boolean")

        return cls(is_encrypted=is_encrypted, cipher_key=cipher_key,
                   start_number=start_number, reverse_groups=reverse_groups,
                   **fields)

    def __repr__(self):
        return f"Message(id={self.id!r}, sender={self.sender!r}, encrypted={self.is_encrypted})"


class MessageStore:
    """Thread-safe list of messages ordered by timestamp."""

    def __init__(self):
        self._lock     = threading.Lock()
        self._messages = {}
        self._counter  = 0

    def list(self) -> List[Message]:
        with self._lock:
            return sorted(self._messages.values(),
                          key=lambda m: (m.timestamp, m._seq))

    def get(self, message_id: str) -> Optional[Message]:
        with self._lock:
            return self._messages.get(message_id)

    def add(self, message: Message) -> Message:
        with self._lock:
            self._counter += 1
            message._seq = self._counter
            self._messages[message.id] = message
        logger.info(f"Stored message {message.id} from {message.sender}")
        return message

    def create(self, sender: str, content: str, is_encrypted: bool = True,
               cipher_key: Optional[str] = None,
               start_number: Optional[int] = None,
               reverse_groups: bool = False) -> Message:
        for name, value in (("sender", sender), ("content", content)):
            if not isinstance(value, str) or not value:
                raise RequestError(name, f"{name} must be a non-empty string")
        return self.add(Message(sender, content, is_encrypted, cipher_key,
                                start_number, reverse_groups))

    def delete(self, message_id: str) -> bool:
        with self._lock:
            removed = self._messages.pop(message_id, None)
        if removed is not None:
            logger.info(f"Deleted message {message_id}")
        return removed is not None

    def decode(self, message_id: str) -> str:
        """
        Decrypt a stored message with the parameters saved alongside it.
        Raises KeyError for an unknown id, RequestError if the message
        carries no cipher parameters, CipherError if decoding fails.
        """
        message = self.get(message_id)
        if message is None:
            raise KeyError(message_id)
        if not message.decodable:
            raise RequestError("cipherKey",
                               "Message has no cipher parameters to decode with")
        return CascadeCipher.decrypt(message.content, message.cipher_key,
                                     message.start_number, message.reverse_groups)

    def __len__(self):
        with self._lock:
            return len(self._messages)
