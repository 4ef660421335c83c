from dataclasses import dataclass
import glob
import os
import random
import time

import serial
import serial.tools.list_ports

from frame import Frame
from hamming import CODE_BITS, bits_to_int, encode_4bit, hamming_decode, int_to_bits

MARKER = 0xFF
PTY_PATTERNS = ("/dev/ttys*", "/dev/pts/*")


@dataclass
class LinkStats:
    """Счетчики принятых кодовых слов и исправленных ошибок."""
    codewords: int = 0
    corrected: int = 0

    def reset(self):
        self.codewords = 0
        self.corrected = 0


def decode_code(encoded: int) -> tuple[int, int | None]:
    """Декодирует 7-битный код, возвращает полубайт и позицию исправленной ошибки."""
    outcome = hamming_decode(int_to_bits(encoded, CODE_BITS))
    return bits_to_int(outcome.corrected_payload), outcome.error_position


def add_noise(encoded: int, probability: float, rng=random) -> int:
    """С заданной вероятностью инвертирует один случайный бит кода."""
    if probability and rng.random() < probability:
        encoded ^= 1 << rng.randrange(CODE_BITS)
    return encoded


def encode_and_send_byte(ser, byte: int, delay: float = 0.01, noise: float = 0.0):
    """Кодирует и отправляет один байт двумя кодами Хэмминга."""
    upper_nibble = (byte >> 4) & 0x0F
    lower_nibble = byte & 0x0F

    encoded_upper = add_noise(encode_4bit(upper_nibble), noise)
    encoded_lower = add_noise(encode_4bit(lower_nibble), noise)

    # Каждая половина байта между маркерами
    ser.write(bytes([MARKER, encoded_upper, MARKER]))
    ser.write(bytes([MARKER, encoded_lower, MARKER]))
    if delay:
        time.sleep(delay)


def send_frame(ser, frame: Frame, delay: float = 0.01, noise: float = 0.0):
    """Отправляет фрейм через serial порт с кодированием Хэмминга."""
    if not ser.is_open:
        raise serial.SerialException("Порт закрыт")
    for byte in frame.to_bytes():
        encode_and_send_byte(ser, byte, delay, noise)


def read_byte(ser, stats: LinkStats = None) -> int | None:
    """Читает два 7-битных кода и собирает байт."""
    data = []
    while len(data) < 2:
        byte = ser.read(1)
        if not byte:
            return None
        if byte[0] == MARKER:
            encoded = ser.read(1)
            stop_byte = ser.read(1)
            if not encoded or stop_byte != bytes([MARKER]) or encoded[0] > 0x7F:
                continue  # Пропускаем ошибочные группы
            nibble, error_pos = decode_code(encoded[0])
            if stats is not None:
                stats.codewords += 1
                if error_pos:
                    stats.corrected += 1
            data.append(nibble)
    return (data[0] << 4) | data[1]


def read_frame(ser, stats: LinkStats = None) -> Frame | None:
    """Читает и собирает фрейм."""
    buffer = bytearray()
    while True:
        byte = read_byte(ser, stats)
        if byte is None:
            return None

        if not buffer and byte != Frame.START_BYTE:
            continue  # ждем начала кадра
        buffer.append(byte)

        if len(buffer) >= Frame.HEADER_LEN:
            try:
                expected = Frame.total_length(buffer[1], buffer[2])
                if len(buffer) >= expected:
                    return Frame.from_bytes(bytes(buffer))
            except ValueError as e:
                print(f"\033[31mОшибка при разборе фрейма: {e}\033[0m")
                buffer.clear()


def list_serial_ports(verbose: bool = True) -> list:
    """Собирает порты для линии: найденные pyserial и доступные псевдотерминалы."""
    hardware = list(serial.tools.list_ports.comports())
    known = {p.device for p in hardware}
    pseudo = [dev for pattern in PTY_PATTERNS for dev in sorted(glob.glob(pattern))
              if dev not in known and os.access(dev, os.R_OK | os.W_OK)]

    candidates = hardware + pseudo
    if verbose:
        print("Порты для линии связи:")
        for i, port in enumerate(candidates):
            name = port if isinstance(port, str) else f"{port.device}, {port.description}"
            print(f"  [{i}] {name}")
    return candidates


def choose_port(argv: list[str], ask=input) -> str | None:
    """Определяет порт по номеру из аргументов или по выбору пользователя."""
    if len(argv) > 1:
        port = f"/dev/ttys{argv[1].zfill(3)}"
        if not os.path.exists(port):
            print(f"Порт {port} не существует")
            return None
        return port

    ports = list_serial_ports()
    if not ports:
        return ask("Введите путь к порту вручную (например, /dev/ttys034): ").strip() or None
    try:
        index = int(ask("Выберите порт по номеру: "))
    except ValueError:
        print("Неверный выбор порта.")
        return None
    if index < 0 or index >= len(ports):
        print("Неверный выбор порта.")
        return None
    return ports[index] if isinstance(ports[index], str) else ports[index].device
