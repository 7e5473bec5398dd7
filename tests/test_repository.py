import threading

import pytest

from scriptbin.store import (
    ErrorKind,
    Forbidden,
    IdSpaceExhausted,
    ScriptNotFound,
    ScriptRepository,
    ValidationFailed,
)


class FixedIds:
    """Hands out a scripted sequence of ids."""

    def __init__(self, *ids: str) -> None:
        self.ids = list(ids)

    def generate(self) -> str:
        return self.ids.pop(0)


def test_create_stores_trimmed_record(repository):
    created = repository.create("  print(1)\n", " alice ", "a.py", "demo")

    record = created.record
    assert record.content == "print(1)"
    assert record.owner == "alice"
    assert record.filename == "a.py"
    assert record.description == "demo"
    assert record.view_count == 0
    assert record.last_modified_at is None
    assert record.last_viewed_at is None
    assert repository.contains(record.id)


def test_create_assigns_a_previously_absent_id(repository):
    created = repository.create("one", "alice")
    assert len(repository) == 1
    assert repository.contains(created.record.id)


def test_create_defaults_filename_and_description(repository):
    record = repository.create("body", "alice", "   ", None).record
    assert record.filename == f"script_{record.id}"
    assert record.description == ""


def test_create_returns_links(repository):
    created = repository.create("body", "alice smith")
    script_id = created.record.id
    assert created.links.raw == f"/raw/{script_id}"
    assert created.links.view == f"/view/{script_id}"
    assert created.links.edit == f"/edit/{script_id}?owner=alice%20smith"


def test_identical_creations_get_distinct_ids(repository):
    first = repository.create("same", "alice").record.id
    second = repository.create("same", "alice").record.id
    assert first != second


def test_create_rejects_invalid_input(repository):
    with pytest.raises(ValidationFailed) as excinfo:
        repository.create("", "  ")
    kinds = [(issue.field, issue.kind) for issue in excinfo.value.issues]
    assert kinds == [("content", ErrorKind.MISSING_FIELD), ("owner", ErrorKind.MISSING_FIELD)]
    assert len(repository) == 0
    assert repository.stats().total_scripts == 0


def test_content_size_boundary(repository):
    repository.create("x" * 100_000, "alice")
    with pytest.raises(ValidationFailed) as excinfo:
        repository.create("x" * 100_001, "alice")
    assert excinfo.value.issues[0].kind is ErrorKind.TOO_LARGE


def test_id_collisions_are_retried(clock):
    repository = ScriptRepository(id_generator=FixedIds("aaaaaaaaaaaa", "aaaaaaaaaaaa", "bbbbbbbbbbbb"), clock=clock)
    assert repository.create("one", "alice").record.id == "aaaaaaaaaaaa"
    assert repository.create("two", "alice").record.id == "bbbbbbbbbbbb"


def test_id_allocation_gives_up(clock):
    repository = ScriptRepository(id_generator=FixedIds(*["cccccccccccc"] * 4), max_id_attempts=3, clock=clock)
    repository.create("one", "alice")
    with pytest.raises(IdSpaceExhausted):
        repository.create("two", "alice")
    assert len(repository) == 1


def test_get_raw_returns_content_and_type(repository):
    script_id = repository.create("print(1)", "alice", "a.py").record.id
    raw = repository.get_raw(script_id)
    assert raw.content == "print(1)"
    assert raw.content_type == "text/plain"


def test_get_raw_resolves_type_from_filename(repository):
    script_id = repository.create("{}", "alice", "DATA.JSON").record.id
    assert repository.get_raw(script_id).content_type == "application/json"


def test_get_raw_is_public_by_default(repository):
    script_id = repository.create("hello", "alice").record.id
    assert repository.get_raw(script_id, viewer="mallory").content == "hello"


def test_get_raw_can_require_owner(clock):
    repository = ScriptRepository(raw_requires_owner=True, clock=clock)
    script_id = repository.create("hello", "alice").record.id
    with pytest.raises(ScriptNotFound):
        repository.get_raw(script_id, viewer="mallory")
    assert repository.get_raw(script_id, viewer="alice").content == "hello"
    assert repository.get_metadata(script_id).view_count == 2


def test_views_increment_counters(repository, clock):
    script_id = repository.create("a\nb\nc", "alice").record.id

    repository.get_raw(script_id)
    summary = repository.get_metadata(script_id)

    assert summary.view_count == 2
    assert summary.last_viewed_at is not None
    assert repository.stats().total_views == 2


def test_metadata_summary(repository):
    script_id = repository.create("a\nb\nc", "alice", "notes.txt", "three lines").record.id
    summary = repository.get_metadata(script_id)
    assert summary.filename == "notes.txt"
    assert summary.description == "three lines"
    assert summary.owner == "alice"
    assert summary.size == 5
    assert summary.lines == 3
    assert summary.raw_url == f"/raw/{script_id}"


def test_missing_ids_raise_not_found(repository):
    with pytest.raises(ScriptNotFound):
        repository.get_raw("nope")
    with pytest.raises(ScriptNotFound):
        repository.get_metadata("nope")
    with pytest.raises(ScriptNotFound):
        repository.get_for_edit("nope", "alice")
    with pytest.raises(ScriptNotFound):
        repository.update("nope", "alice", "x")
    with pytest.raises(ScriptNotFound):
        repository.delete("nope", "alice")
    assert repository.stats().total_views == 0


def test_get_for_edit_checks_owner_without_counting_a_view(repository):
    script_id = repository.create("body", "alice").record.id
    record = repository.get_for_edit(script_id, "alice")
    assert record.content == "body"
    assert record.view_count == 0
    with pytest.raises(Forbidden):
        repository.get_for_edit(script_id, "bob")
    assert repository.stats().total_views == 0


def test_returned_records_are_copies(repository):
    script_id = repository.create("body", "alice").record.id
    record = repository.get_for_edit(script_id, "alice")
    record.owner = "mallory"
    record.content = "changed"
    assert repository.get_raw(script_id).content == "body"
    with pytest.raises(Forbidden):
        repository.delete(script_id, "mallory")


def test_update_by_owner(repository):
    created = repository.create("old", "alice", "a.py", "first").record
    repository.get_raw(created.id)

    updated = repository.update(created.id, "alice", "  new  ", "b.js", "second")

    assert updated.content == "new"
    assert updated.filename == "b.js"
    assert updated.description == "second"
    assert updated.last_modified_at is not None
    assert updated.id == created.id
    assert updated.owner == "alice"
    assert updated.created_at == created.created_at
    assert updated.view_count == 1


def test_update_keeps_fields_left_blank(repository):
    script_id = repository.create("old", "alice", "a.py", "first").record.id
    updated = repository.update(script_id, "alice", "new", "", None)
    assert updated.filename == "a.py"
    assert updated.description == "first"


def test_update_by_non_owner_leaves_record_alone(repository):
    script_id = repository.create("old", "alice", "a.py").record.id
    with pytest.raises(Forbidden):
        repository.update(script_id, "bob", "new", "b.py")
    record = repository.get_for_edit(script_id, "alice")
    assert record.content == "old"
    assert record.filename == "a.py"
    assert record.last_modified_at is None


def test_update_validates_new_content(repository):
    script_id = repository.create("old", "alice").record.id
    with pytest.raises(ValidationFailed):
        repository.update(script_id, "alice", "   ")
    assert repository.get_for_edit(script_id, "alice").content == "old"


def test_delete_by_owner(repository):
    script_id = repository.create("body", "alice").record.id
    repository.delete(script_id, "alice")
    with pytest.raises(ScriptNotFound):
        repository.get_raw(script_id)
    stats = repository.stats()
    assert stats.total_scripts == 0
    assert stats.created_today == 1


def test_delete_by_non_owner_keeps_record(repository):
    script_id = repository.create("body", "alice").record.id
    with pytest.raises(Forbidden):
        repository.delete(script_id, "bob")
    with pytest.raises(Forbidden):
        repository.delete(script_id, None)
    assert repository.get_raw(script_id).content == "body"
    assert repository.stats().total_scripts == 1


def test_total_scripts_never_goes_negative(repository):
    script_id = repository.create("body", "alice").record.id
    repository._stats.counters.total_scripts = 0
    repository.delete(script_id, "alice")
    assert repository.stats().total_scripts == 0


def test_list_orders_newest_first_and_paginates(repository):
    ids = [repository.create(f"script {n}", "alice").record.id for n in range(5)]

    page = repository.list(page=1, limit=2)
    assert [summary.id for summary in page.items] == [ids[4], ids[3]]
    assert page.total == 5

    page = repository.list(page=3, limit=2)
    assert [summary.id for summary in page.items] == [ids[0]]
    assert page.total == 5


def test_list_does_not_count_views(repository):
    repository.create("body", "alice")
    repository.list()
    assert repository.stats().total_views == 0


def test_list_ties_keep_insertion_order():
    stamp = ScriptRepository().clock()
    repository = ScriptRepository(clock=lambda: stamp)
    ids = [repository.create(f"script {n}", "alice").record.id for n in range(3)]
    assert [summary.id for summary in repository.list().items] == ids


def test_concurrent_creates_get_unique_ids(repository):
    def worker():
        for _ in range(50):
            repository.create("body", "alice")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(repository) == 200
    assert repository.stats().total_scripts == 200


def test_raw_owner_check_trims_viewer_like_edit_does(clock):
    repository = ScriptRepository(raw_requires_owner=True, clock=clock)
    script_id = repository.create("hello", "alice").record.id
    assert repository.get_raw(script_id, viewer=" alice ").content == "hello"
    assert repository.get_for_edit(script_id, " alice ").content == "hello"
    with pytest.raises(ScriptNotFound):
        repository.get_raw(script_id, viewer="   ")
