from dataclasses import dataclass, replace
from typing import Optional

from errors import InvalidCharacter, InvalidLength

DATA_BITS = 4
CODE_BITS = 7
DATA_POSITIONS = (3, 5, 6, 7)  # позиции битов данных в кодовом слове (с единицы)


@dataclass(frozen=True)
class HammingDecodeOutcome:
    corrected_payload: str
    error_position: Optional[int] = None


def _to_bits(value: str, length: int) -> list[int]:
    if len(value) != length:
        raise InvalidLength(f"Ожидалось {length} бит, получено {len(value)}")
    for ch in value:
        if ch not in '01':
            raise InvalidCharacter(f"Недопустимый символ {ch!r} в двоичной строке {value!r}")
    return [int(ch) for ch in value]


def hamming_encode(payload: str) -> str:
    """Кодирует 4 бита в 7-битное кодовое слово [p1, p2, d1, p3, d2, d3, d4]."""
    d0, d1, d2, d3 = _to_bits(payload, DATA_BITS)
    p1 = d0 ^ d1 ^ d3
    p2 = d0 ^ d2 ^ d3
    p3 = d1 ^ d2 ^ d3
    return ''.join(str(b) for b in (p1, p2, d0, p3, d1, d2, d3))


def hamming_decode(codeword: str) -> HammingDecodeOutcome:
    """Декодирует кодовое слово, исправляя одиночную ошибку по синдрому."""
    bits = _to_bits(codeword, CODE_BITS)
    b1, b2, b3, b4, b5, b6, b7 = bits

    s1 = b1 ^ b3 ^ b5 ^ b7
    s2 = b2 ^ b3 ^ b6 ^ b7
    s3 = b4 ^ b5 ^ b6 ^ b7
    error_pos = s1 + (s2 << 1) + (s3 << 2)

    if error_pos:
        bits[error_pos - 1] ^= 1  # Исправляем ошибку в копии

    payload = ''.join(str(bits[pos - 1]) for pos in DATA_POSITIONS)
    return HammingDecodeOutcome(payload, error_pos or None)


def flip_bit(codeword: str, index: int) -> str:
    """Инвертирует бит с индексом index (с нуля) и возвращает новое слово."""
    bits = _to_bits(codeword, CODE_BITS)
    if not 0 <= index < CODE_BITS:
        raise IndexError(f"Индекс бита вне диапазона 0-{CODE_BITS - 1}: {index}")
    bits[index] ^= 1
    return ''.join(str(b) for b in bits)


def int_to_bits(value: int, width: int) -> str:
    """Биты числа от младшего к старшему: бит 0 становится первым символом."""
    return ''.join(str((value >> i) & 1) for i in range(width))


def bits_to_int(bits: str) -> int:
    return sum(int(bit) << i for i, bit in enumerate(bits))


def encode_4bit(data: int) -> int:
    """Кодирует полубайт в 7-битный код Хэмминга (бит 0 кода = позиция 1)."""
    if not 0 <= data <= 0x0F:
        raise InvalidLength(f"Полубайт вне диапазона 0x0-0xF: {data}")
    return bits_to_int(hamming_encode(int_to_bits(data, DATA_BITS)))


def decode_7bit(encoded: int) -> int:
    """Декодирует 7-битный код Хэмминга в исправленный полубайт."""
    if not 0 <= encoded <= 0x7F:
        raise InvalidLength(f"Код вне диапазона 0x00-0x7F: {encoded}")
    return bits_to_int(hamming_decode(int_to_bits(encoded, CODE_BITS)).corrected_payload)


@dataclass(frozen=True)
class HammingTrial:
    """Эксперимент с внесением ошибок: исходные данные, код и принятое слово."""
    original: str
    encoded: str
    received: str
    corrected: str
    error_position: Optional[int] = None

    @classmethod
    def start(cls, payload: str) -> 'HammingTrial':
        encoded = hamming_encode(payload)
        return cls(payload, encoded, encoded, payload, None)

    def flip(self, index: int) -> 'HammingTrial':
        received = flip_bit(self.received, index)
        outcome = hamming_decode(received)
        return replace(self, received=received, corrected=outcome.corrected_payload,
                       error_position=outcome.error_position)

    @property
    def flipped_positions(self) -> list[int]:
        return [i + 1 for i, (a, b) in enumerate(zip(self.encoded, self.received)) if a != b]

    @property
    def recovered(self) -> bool:
        return self.corrected == self.original
