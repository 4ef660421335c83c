class IntegrityError(ValueError):
    """Базовая ошибка ядра контрольных сумм и кода Хэмминга."""


class InvalidLength(IntegrityError):
    """Длина блока не равна 4 (данные) или 7 (кодовое слово)."""


class InvalidCharacter(IntegrityError):
    """В двоичной строке встретился символ, отличный от '0' и '1'."""


class UnsupportedConfig(IntegrityError):
    """Неподдерживаемые параметры контрольной суммы."""
