from typing import Optional

from .models import RecordDraft
from .storage import DRAFT_KEY, JsonStore, read_model


class DraftCache:
    """The single unsubmitted record, shared by every group and user."""

    def __init__(self, store: JsonStore):
        self.store = store

    def get(self) -> Optional[RecordDraft]:
        return read_model(self.store, DRAFT_KEY, RecordDraft)

    def save(self, draft: RecordDraft):
        self.store.write(DRAFT_KEY, draft.model_dump(mode="json", exclude_none=True))

    def clear(self):
        self.store.remove(DRAFT_KEY)
