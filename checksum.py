from dataclasses import dataclass

from errors import UnsupportedConfig

SUPPORTED_WIDTHS = (8, 16, 32)


@dataclass(frozen=True)
class ChecksumConfig:
    bit_width: int = 16
    initial_value: int = 0

    def validate(self) -> None:
        """Проверяет разрядность и начальное значение регистра."""
        if (isinstance(self.bit_width, bool) or not isinstance(self.bit_width, int)
                or self.bit_width not in SUPPORTED_WIDTHS):
            raise UnsupportedConfig(
                f"Разрядность {self.bit_width!r} не поддерживается, допустимо: 8, 16, 32")
        if isinstance(self.initial_value, bool) or not isinstance(self.initial_value, int):
            raise UnsupportedConfig(f"Начальное значение должно быть целым: {self.initial_value!r}")
        if self.initial_value < 0:
            raise UnsupportedConfig(f"Начальное значение не может быть отрицательным: {self.initial_value}")

    @property
    def mask(self) -> int:
        return (1 << self.bit_width) - 1

    @property
    def digits(self) -> int:
        return self.bit_width // 4


def code_units(message) -> list[int]:
    """Возвращает числовые коды сообщения: UTF-16 для строк, байты для bytes."""
    if isinstance(message, (bytes, bytearray, memoryview)):
        return list(bytes(message))
    raw = message.encode('utf-16-le', 'surrogatepass')
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def compute_checksum(message, config: ChecksumConfig) -> str:
    """Аддитивная контрольная сумма: сумма кодов символов по маске разрядности."""
    config.validate()
    total = config.initial_value
    for unit in code_units(message):
        total += unit
    # маска накладывается на итоговую сумму, переполнение по ходу допустимо
    return f"{total & config.mask:0{config.digits}X}"


def verify_checksum(message, expected: str, config: ChecksumConfig) -> bool:
    """Сравнивает пересчитанную контрольную сумму с полученной."""
    return compute_checksum(message, config) == expected.strip().upper()
