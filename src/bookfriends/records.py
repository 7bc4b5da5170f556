import logging
from typing import List

from .models import BookRecord
from .storage import RECORDS_KEY, JsonStore, read_models, write_models

logger = logging.getLogger(__name__)


class RecordRepository:
    """
    The flat collection of journal entries shared by every group.

    Records are never edited in place: an entry is created once and can
    only be deleted.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def list_all(self) -> List[BookRecord]:
        return read_models(self.store, RECORDS_KEY, BookRecord)

    def list_by_group(self, group_id: str) -> List[BookRecord]:
        return [r for r in self.list_all() if r.group_id == group_id]

    def list_by_author(self, name: str) -> List[BookRecord]:
        # Members have no id that spans groups, so "mine" means "same name".
        return [r for r in self.list_all() if r.author_name == name]

    def create(self, record: BookRecord):
        records = self.list_all()
        records.append(record)
        write_models(self.store, RECORDS_KEY, records)
        logger.info(f"Saved record {record.id} ({record.title!r}) in group {record.group_id}")

    def delete_by_id(self, record_id: str):
        records = self.list_all()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return
        write_models(self.store, RECORDS_KEY, remaining)
        logger.info(f"Deleted record {record_id}")
