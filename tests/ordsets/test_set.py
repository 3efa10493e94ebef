import logging

from ordsets import MinMax, Set, SetKind
from ordsets.indices import invert, sort_index

DATA = [1, 14, 2, 13, 3, 12, 4, 11, 5, 10, 10, 6, 9, 7, 8, 16]


def test_empty_set():
    """Test creating an empty Set and asserting it is empty"""
    s = Set.empty(int)
    assert s.kind == SetKind.Empty
    assert s.null()
    assert s.size() == 0
    assert s.list() == []
    assert s.aux_index == []
    assert s.ascending
    assert s == Set.new_empty()


def test_empty_not_shared():
    """Each empty set owns its own storage"""
    a = Set.new_empty()
    b = Set.new_empty()
    a.minsert(1)
    assert b.null()


def test_constructors_on_empty_data():
    assert Set.new_unordered([]) == Set.new_empty()
    assert Set.new_ordered([], False) == Set.new_empty()
    assert Set.new_indexed([]) == Set.new_empty()
    assert Set.new_ranked([]) == Set.new_empty()
    assert Set.new(SetKind.Empty, DATA) == Set.new_empty()


def test_new_unordered():
    s = Set.new_unordered(DATA)
    assert s.kind == SetKind.Unordered
    assert s.data == DATA
    assert s.aux_index == []
    assert len(s) == 16


def test_constructor_copies_input():
    values = [3, 1, 2]
    s = Set.new_indexed(values)
    values.append(0)
    assert s.data == [3, 1, 2]


def test_new_ordered():
    assert Set.new_ordered(DATA).data == sorted(DATA)
    desc = Set.new_ordered(DATA, False)
    assert desc.data == sorted(DATA, reverse=True)
    assert not desc.ascending


def test_new_indexed():
    s = Set.new_indexed(DATA)
    assert s.kind == SetKind.Indexed
    assert s.data == DATA
    assert s.aux_index == sort_index(DATA)
    assert s.ordered() == sorted(DATA)
    assert Set.new_indexed(DATA, False).ordered() == sorted(DATA, reverse=True)


def test_new_ranked():
    s = Set.new_ranked(DATA)
    assert s.kind == SetKind.Ranked
    assert s.data == DATA
    assert s.aux_index[0] == 0
    assert s.aux_index[15] == 15
    # Tied tens keep their insertion order
    assert s.aux_index[9] == 9
    assert s.aux_index[10] == 10
    assert s.ordered() == sorted(DATA)


def test_new_dispatches_on_kind():
    for kind in (SetKind.Unordered, SetKind.Ordered, SetKind.Indexed, SetKind.Ranked):
        assert Set.new(kind, DATA).kind == kind


def test_iteration_follows_data():
    s = Set.new_indexed([3, 1, 2])
    assert list(s) == [3, 1, 2]
    assert s.list() == [3, 1, 2]


def test_conversions_of_empty_stay_empty():
    e = Set.new_empty()
    assert e.to_unordered() == e
    assert e.to_ordered(False) == e
    assert e.to_indexed(False) == e
    assert e.to_ranked(True) == e
    assert e.reverse() == e
    assert e.dedup() == e


def test_to_unordered_keeps_physical_order():
    s = Set.new_ordered(DATA, False).to_unordered()
    assert s.kind == SetKind.Unordered
    assert s.data == sorted(DATA, reverse=True)
    assert not s.ascending


def test_to_unordered_warns_on_discarded_index(caplog):
    s = Set.new_ranked(DATA)
    with caplog.at_level(logging.WARNING, logger="ordsets.mutable"):
        u = s.to_unordered()
    assert "Discarding Ranked index" in caplog.text
    assert u.data == DATA
    assert u.aux_index == []


def test_to_ordered_from_each_kind():
    expected = sorted(DATA, reverse=True)
    assert Set.new_unordered(DATA).to_ordered(False).data == expected
    assert Set.new_ordered(DATA, True).to_ordered(False).data == expected
    assert Set.new_indexed(DATA, True).to_ordered(False).data == expected
    assert Set.new_ranked(DATA, True).to_ordered(False).data == expected
    assert Set.new_ranked(DATA, False).to_ordered(False).data == expected


def test_ordered_to_indexed_uses_trivial_index():
    s = Set.new_ordered([1, 2, 3])
    assert s.to_indexed(True).aux_index == [0, 1, 2]
    assert s.to_indexed(False).aux_index == [2, 1, 0]
    assert s.to_ranked(False).aux_index == [2, 1, 0]


def test_ranked_to_indexed():
    s = Set.new_ranked([30, 10, 20])
    assert s.aux_index == [2, 0, 1]
    assert s.to_indexed(True).aux_index == [1, 2, 0]
    assert s.to_indexed(False).aux_index == [0, 2, 1]


def test_indexed_to_ranked():
    s = Set.new_indexed([30, 10, 20])
    assert s.to_ranked(True).aux_index == [2, 0, 1]
    assert s.to_ranked(False).aux_index == [0, 2, 1]


def test_conversion_does_not_mutate_source():
    s = Set.new_unordered(DATA)
    before = s.copy()
    s.to_ordered(False)
    s.to_indexed(True)
    s.to_ranked(False)
    assert s == before


def test_single_element_conversions():
    s = Set.new_unordered([42])
    for asc in (True, False):
        assert s.to_ordered(asc).data == [42]
        assert s.to_indexed(asc).aux_index == [0]
        assert s.to_ranked(asc).aux_index == [0]
        assert s.to_ranked(asc).reverse().aux_index == [0]


def test_descending_ranks_reversed_are_ascending_ranks():
    s = Set.new_unordered(DATA)
    assert s.to_ranked(False).reverse() == s.to_ranked(True)


def test_to_same():
    s = Set.new_unordered(DATA)
    template = Set.new_indexed([1], False)
    assert s.to_same(template) == s.to_indexed(False)
    assert s.to_same(Set.new_ranked([5])) == s.to_ranked(True)
    assert s.to_same(Set.new_empty()) == Set.new_empty()


def test_msame_in_place():
    s = Set.new_ranked(DATA, False)
    s.msame(Set.new_ordered([2, 1]))
    assert s.kind == SetKind.Ordered
    assert s.data == sorted(DATA)


def test_infsup():
    assert Set.new_empty().infsup() is None
    assert Set.new_unordered(DATA).infsup() == MinMax(1, 0, 16, 15)
    assert Set.new_ordered(DATA).infsup() == MinMax(1, 0, 16, 15)
    assert Set.new_ordered(DATA, False).infsup() == MinMax(1, 15, 16, 0)
    assert Set.new_indexed(DATA).infsup() == MinMax(1, 0, 16, 15)
    assert Set.new_indexed(DATA, False).infsup() == MinMax(1, 0, 16, 15)
    assert Set.new_ranked(DATA, False).infsup() == MinMax(1, 0, 16, 15)


def test_infsup_single():
    assert Set.new_ranked([7]).infsup() == MinMax(7, 0, 7, 0)


def test_search_unordered():
    s = Set.new_unordered(DATA)
    assert s.search(12) == 5
    assert s.search(10) == 9
    assert s.search(0) is None


def test_search_ordered():
    assert Set.new_ordered(DATA).search(12) == 12
    assert Set.new_ordered(DATA, False).search(12) == 3
    assert Set.new_ordered(DATA).search(15) is None


def test_search_indexed_and_ranked_report_data_positions():
    for asc in (True, False):
        assert Set.new_indexed(DATA, asc).search(12) == 5
        assert Set.new_ranked(DATA, asc).search(12) == 5
        assert Set.new_indexed(DATA, asc).search(10) == 9
        assert Set.new_ranked(DATA, asc).search(10) == 9
        assert Set.new_ranked(DATA, asc).search(0) is None


def test_member():
    for kind in (SetKind.Unordered, SetKind.Ordered, SetKind.Indexed, SetKind.Ranked):
        s = Set.new(kind, DATA, False)
        assert s.member(13)
        assert 13 in s
        assert not s.member(0)
        assert 0 not in s
    assert not Set.new_empty().member(1)


def test_position():
    assert Set.new_empty().position(3) == 0
    assert Set.new_unordered(DATA).position(3) == 16
    asc = Set.new_ordered(DATA)
    assert asc.position(15) == 15
    assert asc.position(0) == 0
    assert asc.position(100) == 16
    assert Set.new_ordered(DATA, False).position(15) == 1
    assert Set.new_indexed(DATA).position(10.5) == 11
    assert Set.new_ranked(DATA, False).position(10.5) == 5


def test_count():
    for kind in (SetKind.Unordered, SetKind.Ordered, SetKind.Indexed, SetKind.Ranked):
        s = Set.new(kind, DATA)
        assert s.count(10) == 2
        assert s.count(4) == 1
        assert s.count(99) == 0
    assert Set.new_empty().count(1) == 0


def test_ranks_invert_to_sort_index():
    s = Set.new_ranked(DATA, False)
    assert invert(s.aux_index) == Set.new_indexed(DATA, False).aux_index


def test_string_elements():
    """Test sets of words, which order by code point"""
    words = "Alphabetic ordering puts punctuation first first and capital".split(" ")
    s = Set.new_ranked(words)
    assert s.ordered() == sorted(words)
    assert s.infsup() == MinMax("Alphabetic", 0, "puts", 2)
    assert s.dedup().size() == len(words) - 1
    assert s.member("first")
    assert not s.member("Spain")
