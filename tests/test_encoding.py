import pytest

from marc_indexer.processors import encoding


@pytest.mark.parametrize("level,expected", [
    (" ", 0),
    ("I", 0),
    ("4", 0),
    ("2", 4),
    ("7", 7),
    ("M", 9),
    ("J", 11),
    ("u", None),
    ("z", None),
])
def test_level_sort(marc_record, level, expected):
    leader: str = f"00000nam a2200000{level}a 4500"
    assert encoding.level_sort(marc_record(leader=leader)) == expected
