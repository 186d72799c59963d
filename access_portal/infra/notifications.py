# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""In-process change notification channel.

Mirrors a broadcast channel between sessions: publishers never wait on or
fail because of subscribers, and a failing handler only loses its own copy
of the message.
"""

import logging
import threading
from typing import Callable, List

from access_portal.core.requests.repositories import ChangeHandler, ChangeNotifier

logger = logging.getLogger(__name__)

DATA_CHANGED = "DATA_CHANGED"
LOGOUT = "LOGOUT"


def data_changed() -> dict:
    """Build the message telling other sessions to reload."""
    return {"type": DATA_CHANGED}


def logout() -> dict:
    """Build the message telling other sessions to drop their session."""
    return {"type": LOGOUT}


class InProcessChangeNotifier(ChangeNotifier):
    """Fan-out of messages to handlers registered in this process."""

    def __init__(self) -> None:
        self._handlers: List[ChangeHandler] = []
        self._lock = threading.Lock()

    def publish(self, message: dict) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(dict(message))
            except Exception:  # pylint: disable=broad-except
                logger.exception("Change handler failed for message %s", message.get("type"))

    def subscribe(self, handler: ChangeHandler) -> Callable[[], None]:
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe


class ReloadOnChange:
    """Invalidate-and-refetch subscriber.

    Calls ``reload`` whenever another session reports a data change and
    ``on_logout`` when a logout is broadcast.
    """

    def __init__(
        self,
        reload: Callable[[], None],
        on_logout: Callable[[], None] = lambda: None,
    ) -> None:
        self._reload = reload
        self._on_logout = on_logout

    def __call__(self, message: dict) -> None:
        message_type = message.get("type")
        if message_type == DATA_CHANGED:
            self._reload()
        elif message_type == LOGOUT:
            self._on_logout()
        else:
            logger.debug("Ignoring unknown change message %s", message_type)


class RevisionCounter:
    """Monotonic data revision that polling clients compare to refetch."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def bump(self) -> None:
        with self._lock:
            self._value += 1
