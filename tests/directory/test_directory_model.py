from src.lecture_attendance.lecture_attendance.directory.cache import DirectoryCache
from src.lecture_attendance.lecture_attendance.directory.model import (
    AllBatchesInBranch,
    FacultyAssignment,
    SpecificBatch,
    parse_batch_selector,
)


def test_parse_batch_selector_sentinel_and_null():
    assert parse_batch_selector("ALL") == AllBatchesInBranch()
    assert parse_batch_selector(None) == AllBatchesInBranch()
    assert parse_batch_selector("batch_cse_a") == SpecificBatch("batch_cse_a")


def test_assignment_covers():
    wildcard = FacultyAssignment("a", "f", "b_cse", AllBatchesInBranch(), "sub")
    specific = FacultyAssignment("b", "f", "b_cse", SpecificBatch("batch_cse_a"), "sub")

    assert wildcard.covers("b_cse", "anything")
    assert not wildcard.covers("b_ece", "anything")
    assert specific.covers("b_cse", "batch_cse_a")
    assert not specific.covers("b_cse", "batch_cse_b")


def test_cache_reads_through_once_until_invalidated(directory):
    cache = DirectoryCache(directory)

    cache.batches_for("b_cse")
    cache.batches_for("b_cse")
    cache.branch_name("b_cse")
    cache.branch_name("b_ece")
    assert directory.calls["get_batches"] == 1
    assert directory.calls["get_branches"] == 1

    cache.invalidate()
    cache.batches_for("b_cse")
    assert directory.calls["get_batches"] == 2


def test_cache_name_fallbacks(directory):
    cache = DirectoryCache(directory)

    assert cache.branch_name("b_cse") == "Computer Science (CSE)"
    assert cache.branch_name("nope") == "nope"
    assert cache.batch_name("b_cse", "batch_cse_a") == "CSE Year 2 - Batch A"
    assert cache.batch_name("b_cse", "ghost") == "ghost"
    assert cache.subject("nope") is None
