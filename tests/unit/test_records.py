"""
Unit tests for RecordRepository.
"""

from bookfriends.records import RecordRepository
from bookfriends.storage import RECORDS_KEY


class TestRecordRepository:
    def test_empty_store_has_no_records(self, store):
        assert RecordRepository(store).list_all() == []

    def test_list_by_group_returns_only_that_group(self, store, make_record):
        repo = RecordRepository(store)
        a1 = make_record(group_id="A")
        a2 = make_record(group_id="A")
        b1 = make_record(group_id="B")
        for record in (a1, b1, a2):
            repo.create(record)

        listed = repo.list_by_group("A")

        assert sorted(r.id for r in listed) == sorted([a1.id, a2.id])
        assert all(r.group_id == "A" for r in listed)

    def test_insertion_order_is_kept(self, store, make_record):
        repo = RecordRepository(store)
        late = make_record(timestamp=2)
        early = make_record(timestamp=1)
        repo.create(late)
        repo.create(early)

        assert [r.id for r in repo.list_by_group("A")] == [late.id, early.id]

    def test_list_by_author_spans_groups(self, store, make_record):
        # Identity is the display name, so Mina's records from both groups come back together.
        repo = RecordRepository(store)
        repo.create(make_record(group_id="A", author_name="Mina"))
        repo.create(make_record(group_id="B", author_name="Mina"))
        repo.create(make_record(group_id="A", author_name="Jun"))

        mine = repo.list_by_author("Mina")

        assert {r.group_id for r in mine} == {"A", "B"}
        assert len(mine) == 2

    def test_same_name_in_one_group_is_not_told_apart(self, store, make_record):
        repo = RecordRepository(store)
        repo.create(make_record(author_name="Mina", review="first Mina"))
        repo.create(make_record(author_name="Mina", review="another Mina"))

        assert len(repo.list_by_author("Mina")) == 2

    def test_create_does_not_check_duplicate_ids(self, store, make_record):
        repo = RecordRepository(store)
        repo.create(make_record(id="same"))
        repo.create(make_record(id="same"))

        assert len(repo.list_all()) == 2

    def test_delete_by_id(self, store, make_record):
        repo = RecordRepository(store)
        keep = make_record()
        gone = make_record()
        repo.create(keep)
        repo.create(gone)

        repo.delete_by_id(gone.id)

        assert [r.id for r in repo.list_by_group("A")] == [keep.id]
        assert gone.id not in [r.id for r in repo.list_by_author("Mina")]

    def test_delete_twice_is_noop(self, store, make_record):
        repo = RecordRepository(store)
        record = make_record()
        repo.create(record)

        repo.delete_by_id(record.id)
        repo.delete_by_id(record.id)

        assert repo.list_all() == []

    def test_delete_unknown_id_leaves_store_untouched(self, store, make_record):
        repo = RecordRepository(store)
        repo.create(make_record())
        before = store.backend.get_item(RECORDS_KEY)

        repo.delete_by_id("missing")

        assert store.backend.get_item(RECORDS_KEY) == before

    def test_records_stored_as_json_objects(self, store, make_record):
        RecordRepository(store).create(make_record(genre="에세이", rating=4.5))

        stored = store.read(RECORDS_KEY)

        assert stored[0]["genre"] == "에세이"
        assert stored[0]["rating"] == 4.5
        assert stored[0]["group_id"] == "A"
