from impi.grouping import (
    FOREIGN_PSEUDO_IMPORT,
    filter_foreign_imports,
    group_imports,
    is_foreign_pseudo_import,
)
from impi.types import ImportDeclaration, ImportRecord


def rec(path: str, start: int, end: int | None = None) -> ImportRecord:
    end = start if end is None else end
    return ImportRecord(path=path, start_line=start, end_line=end, import_line=end)


def test_empty_input_gives_no_groups():
    assert group_imports([]) == []


def test_adjacent_records_share_a_group():
    groups = group_imports([rec("fmt", 3), rec("os", 4), rec("path", 5)])
    assert [g.paths for g in groups] == [["fmt", "os", "path"]]


def test_blank_line_starts_new_group():
    groups = group_imports([rec("fmt", 3), rec("os", 4), rec("a.b/c", 6)])
    assert [g.paths for g in groups] == [["fmt", "os"], ["a.b/c"]]


def test_lead_comment_keeps_record_in_group():
    # "b" has a comment on line 4 attached to it
    groups = group_imports([rec("a.x/a", 3), rec("a.x/b", 4, 5), rec("a.x/c", 6)])
    assert len(groups) == 1


def test_multiline_record_end_line_is_used():
    groups = group_imports([rec("fmt", 3, 5), rec("os", 6), rec("path", 8)])
    assert [g.paths for g in groups] == [["fmt", "os"], ["path"]]


def test_grouping_is_idempotent():
    records = [rec("fmt", 3), rec("os", 4), rec("a.b/c", 6), rec("z.z/z", 9)]
    first = group_imports(records)
    flattened = [r for g in first for r in g.records]
    assert flattened == records
    assert group_imports(flattened) == first


def test_foreign_pseudo_import_detection():
    only_c = ImportDeclaration(start_line=10, end_line=10, records=(rec(FOREIGN_PSEUDO_IMPORT, 10),))
    mixed = ImportDeclaration(start_line=1, end_line=4, records=(rec("C", 2), rec("fmt", 3)))
    empty = ImportDeclaration(start_line=1, end_line=2)

    assert is_foreign_pseudo_import(only_c)
    assert not is_foreign_pseudo_import(mixed)
    assert not is_foreign_pseudo_import(empty)

    assert filter_foreign_imports([mixed, only_c, empty]) == [mixed, empty]
