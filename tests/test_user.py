import pytest

from hotline.user import User, decode_user_string, negate_string, read_user


def test_read_user_returns_expected_user():
    data = bytes([0x00, 0x01, 0x07, 0xD0, 0x00, 0x01, 0x00, 0x03, 0x61, 0x61, 0x61])
    assert read_user(data) == User(
        id=bytes([0x00, 0x01]),
        icon=bytes([0x07, 0xD0]),
        flags=bytes([0x00, 0x01]),
        name="aaa",
    )


def test_read_user_too_short():
    with pytest.raises(ValueError):
        read_user(bytes([0, 1, 0, 2]))


def test_payload_round_trip():
    data = bytes([0x00, 0x01, 0x07, 0xD0, 0x00, 0x01, 0x00, 0x03, 0x61, 0x61, 0x61])
    assert read_user(data).payload() == data


def test_payload_trims_four_byte_icon_and_flags():
    user = User(id=bytes([0, 5]), icon=bytes([0, 0, 0, 9]), flags=bytes([0, 0, 0, 2]), name="ab")
    assert user.payload() == bytes([0, 5, 0, 9, 0, 2, 0, 2, 0x61, 0x62])


def test_payload_rejects_short_id():
    user = User(id=b"\x01", icon=bytes([0, 1]), flags=bytes([0, 0]), name="x")
    with pytest.raises(ValueError):
        user.payload()


def test_decode_user_string_guest():
    assert decode_user_string(bytes([0x98, 0x8A, 0x9A, 0x8C, 0x8B])) == "guest"


@pytest.mark.parametrize(
    ("clear", "expected"),
    [
        (b"guest", bytes([0x98, 0x8A, 0x9A, 0x8C, 0x8B])),
        (b"foo1", bytes([0x99, 0x90, 0x90, 0xCE])),
    ],
)
def test_negate_string(clear, expected):
    assert negate_string(clear) == expected


def test_negate_string_is_its_own_inverse():
    data = bytes(range(256))
    assert negate_string(negate_string(data)) == data