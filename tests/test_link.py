import pytest
import serial
import serial.tools.list_ports

import link
from checksum import ChecksumConfig
from frame import Frame
from hamming import encode_4bit
from link import LinkStats, add_noise, decode_code, read_frame, send_frame


@pytest.fixture
def loop():
    ser = serial.serial_for_url('loop://', timeout=0.1)
    yield ser
    ser.close()


def test_loopback_frame(loop):
    frame = Frame.build("ping", ChecksumConfig(16, 0))
    send_frame(loop, frame, delay=0)
    stats = LinkStats()
    received = read_frame(loop, stats)
    assert received.to_bytes() == frame.to_bytes()
    assert received.verify(ChecksumConfig(16, 0))
    assert stats.codewords == 2 * len(frame.to_bytes())
    assert stats.corrected == 0


def test_noisy_line_is_corrected(loop):
    # при вероятности 1 в каждом коде ровно один инвертированный бит
    frame = Frame.build("шум в линии", ChecksumConfig(32, 7))
    send_frame(loop, frame, delay=0, noise=1.0)
    stats = LinkStats()
    received = read_frame(loop, stats)
    assert received.data == frame.data
    assert received.verify(ChecksumConfig(32, 7))
    assert stats.corrected == stats.codewords == 2 * len(frame.to_bytes())


def test_garbage_before_frame_is_skipped(loop):
    loop.write(bytes([0x00, 0x13, 0xFF, encode_4bit(0x1), 0xFF, 0xFF, encode_4bit(0x2), 0xFF]))
    frame = Frame.build("ok", ChecksumConfig(8, 0))
    send_frame(loop, frame, delay=0)
    assert read_frame(loop).data == b"ok"


def test_timeout_returns_none(loop):
    assert read_frame(loop) is None


def test_closed_port():
    ser = serial.serial_for_url('loop://', timeout=0.1)
    ser.close()
    with pytest.raises(serial.SerialException):
        send_frame(ser, Frame.build("x", ChecksumConfig(16, 0)), delay=0)


def test_decode_code_reports_position():
    code = encode_4bit(0xA)
    assert decode_code(code) == (0xA, None)
    assert decode_code(code ^ 0b100) == (0xA, 3)


class FixedRandom:
    def __init__(self, value, bit):
        self.value = value
        self.bit = bit

    def random(self):
        return self.value

    def randrange(self, n):
        return self.bit


def test_add_noise():
    assert add_noise(0b0000000, 0.5, FixedRandom(0.4, 6)) == 0b1000000
    assert add_noise(0b0000000, 0.5, FixedRandom(0.6, 6)) == 0
    assert add_noise(0b1010101, 0.0, FixedRandom(0.0, 0)) == 0b1010101


def test_list_serial_ports_adds_pseudo_terminals(monkeypatch, capsys):
    monkeypatch.setattr(serial.tools.list_ports, 'comports', lambda: [])
    monkeypatch.setattr(link.glob, 'glob', lambda pattern: ['/dev/pts/7'] if 'pts' in pattern else [])
    monkeypatch.setattr(link.os, 'access', lambda path, mode: True)
    assert link.list_serial_ports() == ['/dev/pts/7']
    assert "[0] /dev/pts/7" in capsys.readouterr().out
