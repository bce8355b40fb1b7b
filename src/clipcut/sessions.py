"""
Pending clip requests, keyed by chat.
A request waits here between the user's message and their format choice.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingRequest:
    """A parsed clip request waiting for the audio/video choice."""

    url: str
    start_time: str
    end_time: str


class SessionStore:
    """
    In-memory store of one pending request per chat.

    Entries never expire: a request stays valid until it is overwritten by a
    newer message or consumed by a format choice. Nothing survives a restart.
    """

    def __init__(self):
        self._requests: Dict[int, PendingRequest] = {}

    def __len__(self) -> int:
        return len(self._requests)

    def get(self, chat_id: int) -> Optional[PendingRequest]:
        return self._requests.get(chat_id)

    def put(self, chat_id: int, request: PendingRequest) -> None:
        """Store a request, replacing any earlier one for the chat."""
        self._requests[chat_id] = request
        logger.info(
            f"Stored pending request for chat {chat_id}: {request.url} "
            f"({request.start_time} -> {request.end_time})"
        )

    def take(self, chat_id: int) -> Optional[PendingRequest]:
        """
        Remove and return the chat's pending request.

        Contains no await point, so two callbacks for the same chat cannot
        both receive the request.
        """
        request = self._requests.pop(chat_id, None)
        if request:
            logger.info(f"Consumed pending request for chat {chat_id}")
        return request
