"""Tests for the version diff engine."""

import io
import json
import logging

import pytest

from factories import RecordingMetrics, item
from verdiff.config import VerdiffConfig
from verdiff.diff import VersionDiffEngine, diff_versions
from verdiff.errors import ErrorCode, InvalidInputError
from verdiff.models import DiffResult, UpdatedPair, VersionedItem
from verdiff.observability import StructuredFormatter


# =========================================================================
# Mixed changes
# =========================================================================

class TestMixedChanges:
    """One entity updated, one removed, one added."""

    def test_created_updated_deleted(self):
        source = [item("a", 1), item("b", 1)]
        target = [item("a", 2), item("c", 1)]

        result = diff_versions(source, target)

        assert result.created == [item("c", 1)]
        assert result.updated == [UpdatedPair(source=item("a", 1), target=item("a", 2))]
        assert result.deleted == [item("b", 1)]

    def test_updated_pair_keeps_original_objects(self):
        s = item("a", 1)
        t = item("a", 2)
        result = diff_versions([s], [t])
        assert result.updated[0].source is s
        assert result.updated[0].target is t

    def test_updated_pair_unpacks_as_tuple(self):
        result = diff_versions([item("a", 1)], [item("a", 2)])
        (pair,) = result.updated
        s, t = pair
        assert (s, t) == (item("a", 1), item("a", 2))
        assert pair == (item("a", 1), item("a", 2))

    def test_lower_target_version_is_still_an_update(self):
        result = diff_versions([item("a", 5)], [item("a", 3)])
        assert result.updated == [UpdatedPair(item("a", 5), item("a", 3))]


# =========================================================================
# Unchanged entities
# =========================================================================

class TestUnchanged:
    def test_same_version_single_item(self):
        result = diff_versions([item("x", 3)], [item("x", 3)])
        assert result == DiffResult()
        assert result.is_empty

    def test_same_collection_both_sides(self):
        items = [item("a", 1), item("b", 4), item("c", 2)]
        result = diff_versions(items, items)
        assert result.is_empty

    def test_payload_ignored(self):
        source = [VersionedItem("a", 1, payload={"name": "old"})]
        target = [VersionedItem("a", 1, payload={"name": "new"})]
        assert diff_versions(source, target).is_empty

    def test_reordered_collection_is_unchanged(self):
        source = [item("a", 1), item("b", 1)]
        target = [item("b", 1), item("a", 1)]
        assert diff_versions(source, target).is_empty


# =========================================================================
# Empty inputs
# =========================================================================

class TestEmptyInputs:
    def test_empty_source_creates_everything(self):
        target = [item("c", 1), item("a", 1), item("b", 2)]
        result = diff_versions([], target)
        assert result.created == target
        assert result.updated == []
        assert result.deleted == []

    def test_empty_target_deletes_everything(self):
        source = [item("c", 1), item("a", 1), item("b", 2)]
        result = diff_versions(source, [])
        assert result.created == []
        assert result.updated == []
        assert result.deleted == source

    def test_both_empty(self):
        result = diff_versions([], [])
        assert result.counts() == {"created": 0, "updated": 0, "deleted": 0}


# =========================================================================
# Ordering
# =========================================================================

class TestOrdering:
    def test_deleted_and_updated_follow_source_order(self):
        source = [item("z", 1), item("y", 1), item("x", 1), item("w", 1)]
        target = [item("w", 2), item("y", 2)]
        result = diff_versions(source, target)
        assert [i.entity_id for i in result.deleted] == ["z", "x"]
        assert [p.source.entity_id for p in result.updated] == ["y", "w"]

    def test_created_follows_target_order(self):
        target = [item("m", 1), item("k", 1), item("l", 1)]
        result = diff_versions([item("k", 1)], target)
        assert [i.entity_id for i in result.created] == ["m", "l"]

    def test_accepts_generators(self):
        result = diff_versions(
            (item(e, 1) for e in "ab"),
            (item(e, 1) for e in "bc"),
        )
        assert [i.entity_id for i in result.created] == ["c"]
        assert [i.entity_id for i in result.deleted] == ["a"]


# =========================================================================
# Custom keys
# =========================================================================

class TestCustomKeys:
    def test_dict_items_with_key_functions(self):
        source = [{"block": {"id": "a"}, "versionNumber": 1}]
        target = [
            {"block": {"id": "a"}, "versionNumber": 2},
            {"block": {"id": "b"}, "versionNumber": 1},
        ]
        result = diff_versions(
            source,
            target,
            entity_key=lambda bv: bv["block"]["id"],
            version_key=lambda bv: bv["versionNumber"],
        )
        assert result.updated == [UpdatedPair(source[0], target[0])]
        assert result.created == [target[1]]
        assert result.deleted == []

    def test_string_version_markers(self):
        result = diff_versions([item("a", "1.0.0")], [item("a", "1.0.1")])
        assert len(result.updated) == 1


# =========================================================================
# Duplicate entity ids
# =========================================================================

class TestDuplicates:
    def test_duplicate_in_source_raises(self):
        with pytest.raises(InvalidInputError) as exc_info:
            diff_versions([item("a", 1), item("a", 2)], [])
        err = exc_info.value
        assert err.code == ErrorCode.INVALID_INPUT
        assert err.context == {"side": "source", "entity_id": "a"}

    def test_duplicate_in_target_raises(self):
        with pytest.raises(InvalidInputError) as exc_info:
            diff_versions([item("a", 1)], [item("b", 1), item("b", 1)])
        assert exc_info.value.context["side"] == "target"

    def test_duplicates_allowed_last_wins(self):
        result = diff_versions(
            [item("a", 1)],
            [item("a", 1), item("a", 2)],
            check_duplicates=False,
        )
        assert result.updated == [UpdatedPair(item("a", 1), item("a", 2))]


# =========================================================================
# VersionDiffEngine
# =========================================================================

@pytest.fixture
def quiet_diff_logger():
    """Raise the diff logger level so stderr only carries the debug dump."""
    logger = logging.getLogger("verdiff.diff")
    previous = logger.level
    logger.setLevel(logging.WARNING)
    yield
    logger.setLevel(previous)


class TestVersionDiffEngine:
    def test_same_result_as_function(self):
        source = [item("a", 1), item("b", 1)]
        target = [item("a", 2), item("c", 1)]
        engine = VersionDiffEngine(VerdiffConfig())
        assert engine.diff(source, target) == diff_versions(source, target)

    def test_default_config(self):
        assert VersionDiffEngine().diff([], [item("a", 1)]).created == [item("a", 1)]

    def test_emits_metrics_per_change(self):
        metrics = RecordingMetrics()
        engine = VersionDiffEngine(VerdiffConfig(metrics=metrics))
        engine.diff(
            [item("a", 1), item("b", 1), item("d", 1)],
            [item("a", 2), item("c", 1)],
        )
        assert metrics.total("verdiff.diff_items_total", change="created") == 1
        assert metrics.total("verdiff.diff_items_total", change="updated") == 1
        assert metrics.total("verdiff.diff_items_total", change="deleted") == 2
        assert [name for name, _, _ in metrics.timings] == ["verdiff.diff_duration_ms"]

    def test_no_counter_for_empty_buckets(self):
        metrics = RecordingMetrics()
        VersionDiffEngine(VerdiffConfig(metrics=metrics)).diff([item("a", 1)], [item("a", 1)])
        assert metrics.increments == []

    def test_duplicate_check_follows_config(self):
        engine = VersionDiffEngine(VerdiffConfig(diff_check_duplicates=False))
        result = engine.diff([item("a", 1), item("a", 1)], [])
        assert result.deleted == [item("a", 1)]

        strict = VersionDiffEngine(VerdiffConfig())
        with pytest.raises(InvalidInputError):
            strict.diff([item("a", 1), item("a", 1)], [])

    def test_debug_dump_written_to_stderr(self, capsys, quiet_diff_logger):
        engine = VersionDiffEngine(VerdiffConfig(debug_dump_diff=True))
        engine.diff([item("a", 1), item("b", 1)], [item("a", 2)])
        dump = json.loads(capsys.readouterr().err)
        assert dump["deleted"] == [{"entity_id": "b", "version": 1}]
        assert dump["updated"] == [
            {
                "source": {"entity_id": "a", "version": 1},
                "target": {"entity_id": "a", "version": 2},
            }
        ]
        assert dump["created"] == []

    def test_no_dump_by_default(self, capsys, quiet_diff_logger):
        VersionDiffEngine(VerdiffConfig()).diff([item("a", 1)], [])
        assert capsys.readouterr().err == ""

    def test_debug_log_record(self):
        logger = logging.getLogger("verdiff.diff")
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        try:
            VersionDiffEngine().diff([item("a", 1)], [item("b", 1)])
        finally:
            logger.removeHandler(handler)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["message"] == "diff computed"
        assert record["created"] == 1
        assert record["deleted"] == 1
        assert record["updated"] == 0
