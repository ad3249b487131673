import io

import pytest

from hotline.transfer import HTXF, Transfer, banner_download

REF_ONE = (1).to_bytes(4, "big")
SIZE_TWO = (2).to_bytes(4, "big")


def _header(protocol: bytes) -> bytes:
    return protocol + REF_ONE + SIZE_TWO + bytes(4)


def test_from_bytes_valid_transfer():
    header = Transfer.from_bytes(_header(b"HTXF"))
    assert header.protocol == HTXF
    assert header.reference_number == REF_ONE
    assert header.data_size == SIZE_TWO
    assert header.reserved == bytes(4)
    assert len(header.to_bytes()) == 16


def test_from_bytes_invalid_protocol():
    with pytest.raises(ValueError, match="invalid protocol"):
        Transfer.from_bytes(_header(b"\x11" * 4))


def test_from_bytes_short_input():
    with pytest.raises(ValueError):
        Transfer.from_bytes(_header(b"HTXF")[:15])


def test_round_trip():
    header = Transfer(reference_number=b"\x01\x02\x03\x04", data_size=b"\x00\x00\x00\x64")
    assert Transfer.from_bytes(header.to_bytes()) == header


def test_to_bytes_starts_with_htxf():
    assert Transfer().to_bytes()[:4] == b"HTXF"


def test_banner_download_writes_file(tmp_path):
    (tmp_path / "banner.jpg").write_bytes(b"\xff\xd8banner")
    out = io.BytesIO()
    assert banner_download(tmp_path, "banner.jpg", out) == 8
    assert out.getvalue() == b"\xff\xd8banner"


def test_banner_download_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        banner_download(tmp_path, "missing.jpg", io.BytesIO())