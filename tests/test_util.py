import pytest

from hotline.util import VERSION, byte_to_int


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (bytes([0, 1]), 1),
        (bytes([0, 1, 0, 0]), 65536),
        (bytes([0xFF, 0xFF]), 65535),
    ],
)
def test_byte_to_int(data, expected):
    assert byte_to_int(data) == expected


def test_byte_to_int_invalid_length():
    with pytest.raises(ValueError, match="unknown byte length"):
        byte_to_int(bytes([1, 0, 0, 0, 0, 0, 0, 0]))


def test_byte_to_int_empty():
    with pytest.raises(ValueError):
        byte_to_int(b"")


def test_version_components_are_numeric():
    assert [int(part) for part in VERSION.split(".")] == [0, 10, 23]