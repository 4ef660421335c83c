import pytest

from checksum import ChecksumConfig
from frame import Frame


def test_build_and_serialize():
    # 72 + 105 = 177
    frame = Frame.build("Hi", ChecksumConfig(16, 0))
    assert frame.checksum == "00B1"
    assert frame.to_bytes() == bytes([0xFF, 16, 2, 72, 105, 0x00, 0xB1, 0xFF])


def test_round_trip_keeps_fields():
    frame = Frame.build("Привет", ChecksumConfig(32, 0x10))
    parsed = Frame.from_bytes(frame.to_bytes())
    assert parsed.data == frame.data
    assert parsed.bit_width == 32
    assert parsed.checksum == frame.checksum
    assert len(parsed.checksum) == 8
    assert parsed.text == "Привет"


def test_verify():
    config = ChecksumConfig(8, 5)
    frame = Frame.build("message", config)
    assert frame.verify(config)
    assert not frame.verify(ChecksumConfig(8, 6))
    assert not frame.verify(ChecksumConfig(16, 5))

    tampered = Frame(b"messagf", frame.bit_width, frame.checksum)
    assert not tampered.verify(config)


def test_empty_message():
    frame = Frame.build("", ChecksumConfig(16, 0x42))
    assert frame.checksum == "0042"
    assert Frame.from_bytes(frame.to_bytes()).verify(ChecksumConfig(16, 0x42))


@pytest.mark.parametrize("raw", [
    bytes([0xFF, 16, 0]),
    bytes([0x00, 16, 0, 0, 0, 0xFF]),
    bytes([0xFF, 16, 2, 72, 0x00, 0xB1, 0xFF]),
    bytes([0xFF, 24, 0, 0, 0, 0, 0xFF]),
])
def test_malformed_frames(raw):
    with pytest.raises(ValueError):
        Frame.from_bytes(raw)


def test_data_limit():
    with pytest.raises(ValueError):
        Frame.build("x" * 256, ChecksumConfig(16, 0))
