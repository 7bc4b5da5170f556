"""
Journal workflows built on the storage components.

This is the layer the front end talks to: it checks form input before
anything is written, assigns record ids and timestamps, and ties group
creation, joining and switching to the session slot.
"""

import logging
import time
import uuid
from datetime import date
from typing import List, Optional

from .drafts import DraftCache
from .errors import (
    GroupNotFound,
    NoActiveSession,
    NotJoined,
    NotRecordAuthor,
    ValidationFailed,
)
from .groups import DEFAULT_CODE_ATTEMPTS, GroupRegistry
from .models import BookRecord, Genre, Group, RecordDraft, Session, UserProfile
from .records import RecordRepository
from .session import SessionManager
from .shelf import newest_first
from .storage import JsonStore

logger = logging.getLogger(__name__)

REVIEW_MAX_CHARS = 500
RATING_MAX = 5.0


class Journal:
    def __init__(self, store: JsonStore, groups: Optional[GroupRegistry] = None, code_attempts: int = DEFAULT_CODE_ATTEMPTS):
        self.store = store
        self.records = RecordRepository(store)
        self.groups = groups or GroupRegistry(store)
        self.sessions = SessionManager(store)
        self.drafts = DraftCache(store)
        self.code_attempts = code_attempts

    # Groups and membership

    def create_group(
        self,
        name: str,
        leader_name: str,
        password: str,
        max_members: int = 5,
        description: str = "",
    ) -> Group:
        if not name or not leader_name or not password:
            raise ValidationFailed("Group name, leader name and password are all required")
        group = Group(
            code=self.groups.generate_code(self.code_attempts),
            name=name,
            leader_name=leader_name,
            max_members=max_members,
            description=description,
            password=password,
        )
        self.groups.create(group)
        return group

    def join(self, code: str, name: str, password: str, profile_image: str = "") -> Session:
        group = self.groups.find_by_code(code)
        if group is None:
            raise GroupNotFound(code)
        if not name or not password:
            raise ValidationFailed("Name and password are required")
        session = Session(
            group=group,
            user=UserProfile(group_id=group.code, name=name, profile_image=profile_image, password=password),
        )
        self.sessions.set_active(session)
        return session

    def switch(self, code: str) -> Session:
        session = self.sessions.switch_to(code)
        if session is None:
            raise NotJoined(code)
        return session

    def current(self) -> Session:
        session = self.sessions.get_active()
        if session is None:
            raise NoActiveSession()
        return session

    def joined(self) -> List[Session]:
        return self.sessions.list_joined()

    # Records

    def group_records(self) -> List[BookRecord]:
        return newest_first(self.records.list_by_group(self.current().group.code))

    def my_records(self) -> List[BookRecord]:
        return newest_first(self.records.list_by_author(self.current().user.name))

    def start_record(self) -> RecordDraft:
        """
        A blank form for the active member with any saved draft filled in.

        The draft slot is shared by every member, so the author always starts
        out as the active member rather than whoever saved the draft.
        """
        author_name = self.current().user.name
        blank = RecordDraft(
            title="",
            author_name=author_name,
            writer="",
            publisher="",
            genre=Genre.NOVEL,
            pages=0,
            start_date="",
            end_date="",
            record_date=date.today().isoformat(),
            cover_image="",
            rating=0.0,
            review="",
        )
        saved = self.drafts.get()
        if saved is None:
            return blank
        return blank.merged(saved).model_copy(update={"author_name": author_name})

    def save_draft(self, draft: RecordDraft):
        self.drafts.save(draft)
        logger.info("Saved record draft for later")

    def submit(self, draft: RecordDraft) -> BookRecord:
        session = self.current()
        _check_form(draft)
        fields = draft.filled()
        fields.setdefault("author_name", session.user.name)
        record = BookRecord(
            **fields,
            id=str(uuid.uuid4()),
            group_id=session.group.code,
            timestamp=int(time.time() * 1000),
        )
        self.records.create(record)
        self.drafts.clear()
        return record

    def delete_record(self, record_id: str):
        """Delete one of the active member's own records; unknown ids are ignored."""
        user = self.current().user
        record = next((r for r in self.records.list_all() if r.id == record_id), None)
        if record is None:
            return
        if record.author_name != user.name:
            raise NotRecordAuthor(record_id)
        self.records.delete_by_id(record_id)


def _check_form(draft: RecordDraft):
    if not draft.title or not draft.cover_image:
        raise ValidationFailed("A title and a cover image are required")
    if draft.review and len(draft.review) > REVIEW_MAX_CHARS:
        raise ValidationFailed(f"Reviews are limited to {REVIEW_MAX_CHARS} characters")
    if draft.rating is not None:
        if not 0 <= draft.rating <= RATING_MAX or (draft.rating * 2) % 1:
            raise ValidationFailed("Ratings go from 0 to 5 in half-star steps")
    if draft.pages is not None and draft.pages < 0:
        raise ValidationFailed("Page count cannot be negative")
