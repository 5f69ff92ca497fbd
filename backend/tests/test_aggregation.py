"""
Unit tests for tallies and class membership matching.
"""

import random

import pytest

from tntt_portal.features.classes.aggregation import (
    format_teacher_name,
    is_class_member,
    match_class_members,
    tally_by_branch,
    tally_by_key,
)
from tntt_portal.features.classes.schemas import ClassInfo


class TestTallyByKey:
    def test_counts_and_diagnostics(self):
        records = [
            {"id": "1", "class_id": "a"},
            {"id": "2", "class_id": "a"},
            {"id": "3", "class_id": "b"},
            {"id": "4", "class_id": None},
            {"id": "5", "class_id": ""},
            {"id": "6"},
        ]
        tally = tally_by_key(records)

        assert tally.counts == {"a": 2, "b": 1}
        assert tally.with_key == 3
        assert tally.without_key == 3
        assert tally.total == 6

    def test_empty(self):
        tally = tally_by_key([])
        assert tally.counts == {}
        assert tally.with_key == tally.without_key == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_sum_invariant_and_order_independent(self, seed):
        rng = random.Random(seed)
        records = [{"class_id": rng.choice(["a", "b", "c", None, ""])} for _ in range(200)]

        tally = tally_by_key(records)
        shuffled = records[:]
        rng.shuffle(shuffled)

        assert sum(tally.counts.values()) + tally.without_key == len(records)
        assert tally_by_key(shuffled) == tally

    def test_custom_key(self):
        tally = tally_by_key([{"student_id": "s1"}, {"student_id": "s1"}], key="student_id")
        assert tally.counts == {"s1": 2}


class TestTallyByBranch:
    def test_counts_via_class_and_seeds_zero(self):
        students = [
            {"class_id": "c1"},
            {"class_id": "c1"},
            {"class_id": "c2"},
            {"class_id": "gone"},
            {"class_id": None},
        ]
        result = tally_by_branch(students, {"c1": "Ấu Nhi", "c2": "Chiên Con"})

        assert result == {"Chiên Con": 1, "Ấu Nhi": 2, "Thiếu Nhi": 0, "Nghĩa Sĩ": 0}


class TestClassMembership:
    cls = ClassInfo(id="c1", name="Ấu Nhi 1")

    def test_id_match(self):
        assert is_class_member({"class_id": "c1"}, self.cls)

    def test_name_fallback_only_without_id(self):
        assert is_class_member({"class_id": None, "class_name": "Ấu Nhi 1"}, self.cls)
        assert not is_class_member({"class_id": "c2", "class_name": "Ấu Nhi 1"}, self.cls)

    def test_no_reference(self):
        assert not is_class_member({"class_id": None, "class_name": None}, self.cls)
        assert not is_class_member({}, self.cls)

    def test_duplicate_names_both_match(self):
        twin = ClassInfo(id="c9", name="Ấu Nhi 1")
        legacy = {"class_name": "Ấu Nhi 1"}
        assert is_class_member(legacy, self.cls) and is_class_member(legacy, twin)

    def test_match_preserves_order(self):
        rows = [
            {"id": "3", "class_id": "c1"},
            {"id": "1", "class_name": "Ấu Nhi 1"},
            {"id": "2", "class_id": "c2"},
        ]
        assert [r["id"] for r in match_class_members(self.cls, rows)] == ["3", "1"]


def test_format_teacher_name():
    assert format_teacher_name({"saint_name": "Giuse", "full_name": "Trần Văn An"}) == "Giuse Trần Văn An"
    assert format_teacher_name({"saint_name": None, "full_name": "Lê Thị Bình"}) == "Lê Thị Bình"
