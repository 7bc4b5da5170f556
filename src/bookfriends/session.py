"""
Active membership and the history of joined groups.

The joined list is keyed by group code and only ever grows. Activating a
membership that is already listed leaves the listed copy as it was first
stored, so a later change to the same membership (a new profile image, say)
shows up in the active slot but not in the joined list.
"""

import logging
from typing import List, Optional

from .models import Session
from .storage import (
    JOINED_GROUPS_KEY,
    SESSION_KEY,
    JsonStore,
    read_model,
    read_models,
    write_models,
)

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(self, store: JsonStore):
        self.store = store

    def get_active(self) -> Optional[Session]:
        return read_model(self.store, SESSION_KEY, Session)

    def set_active(self, session: Session):
        self.store.write(SESSION_KEY, session.model_dump(mode="json"))
        self._add_joined(session)

    def clear_active(self):
        self.store.remove(SESSION_KEY)

    def list_joined(self) -> List[Session]:
        return read_models(self.store, JOINED_GROUPS_KEY, Session)

    def switch_to(self, code: str) -> Optional[Session]:
        """Make the joined membership for ``code`` active again."""
        session = next((s for s in self.list_joined() if s.group.code == code), None)
        if session is None:
            return None
        self.set_active(session)
        logger.info(f"Switched to group {code} as {session.user.name!r}")
        return session

    def _add_joined(self, session: Session):
        joined = self.list_joined()
        if any(s.group.code == session.group.code for s in joined):
            return
        joined.append(session)
        write_models(self.store, JOINED_GROUPS_KEY, joined)
        logger.info(f"Joined group {session.group.code} as {session.user.name!r}")
