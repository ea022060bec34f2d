# FILE: tests/test_grouping.py

from voyage.services.grouping import group_memories, sorted_groups


def _memory(mid, from_date):
    return {"_id": mid, "fromDate": from_date, "toDate": from_date}


def test_groups_by_year_and_month():
    memories = [
        _memory("a", "2024-06-20"),
        _memory("b", "2024-06-02"),
        _memory("c", "2024-01-15"),
        _memory("d", "2023-06-20"),
    ]

    grouped = group_memories(memories)

    assert list(grouped) == ["2024", "2023"]
    assert list(grouped["2024"]) == ["June", "January"]

    june = grouped["2024"]["June"]
    assert june["month"] == 5
    assert june["monthName"] == "June"
    assert [m["_id"] for m in june["memories"]] == ["a", "b"]
    assert [m["_id"] for m in grouped["2023"]["June"]["memories"]] == ["d"]


def test_bucket_preserves_input_order():
    """Memories inside a bucket keep the relative input order"""
    memories = [_memory("x", "2024-06-01"), _memory("y", "2024-06-30"), _memory("z", "2024-06-15")]

    grouped = group_memories(memories)

    assert [m["_id"] for m in grouped["2024"]["June"]["memories"]] == ["x", "y", "z"]


def test_grouping_is_idempotent():
    memories = [_memory("a", "2024-06-20"), _memory("b", "2023-02-01")]

    assert group_memories(memories) == group_memories(memories)


def test_empty_input():
    assert group_memories([]) == {}


def test_sorted_groups_latest_first():
    memories = [
        _memory("a", "2022-01-01"),
        _memory("b", "2024-03-01"),
        _memory("c", "2024-11-01"),
        _memory("d", "2023-05-01"),
    ]

    ordered = sorted_groups(group_memories(memories))

    assert [year for year, _ in ordered] == ["2024", "2023", "2022"]
    assert [name for name, _ in ordered[0][1]] == ["November", "March"]
