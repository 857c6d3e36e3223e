# Copyright 2026 Justin Cook
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

"""
Append-only narrative of what each agent is doing, shown while analysis runs.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from career_navigator.models import AgentLogEntry

logger = logging.getLogger(__name__)


class SessionLog:
    """
    Ordered record of agent activity.
    Entries are never mutated or removed; order is insertion order.
    """
    def __init__(self, listener: Optional[Callable[[AgentLogEntry], None]] = None):
        self._entries: List[AgentLogEntry] = []
        self.listener = listener

    def append(self, agent: str, message: str) -> AgentLogEntry:
        entry = AgentLogEntry(agent=agent, message=message, timestamp=datetime.now())
        self._entries.append(entry)
        logger.info(f"[{agent}] {message}")
        if self.listener:
            self.listener(entry)
        return entry

    def entries(self) -> Tuple[AgentLogEntry, ...]:
        """Snapshot of every entry in insertion order."""
        return tuple(self._entries)

    def recent(self, n: int) -> Tuple[AgentLogEntry, ...]:
        if n <= 0:
            return ()
        return tuple(self._entries[-n:])

    def __len__(self) -> int:
        return len(self._entries)
