from dataclasses import dataclass, asdict
import json
import os

from checksum import ChecksumConfig, SUPPORTED_WIDTHS

CHECKSUM_CONFIG_FILE = 'checksum_config.json'
SERIAL_CONFIG_FILE = 'serial_config.json'


@dataclass
class ChecksumSettings:
    bit_width: int = 16
    initial_value: int = 0

    @classmethod
    def load(cls, filename: str = CHECKSUM_CONFIG_FILE) -> 'ChecksumSettings':
        """Загружает параметры контрольной суммы из JSON файла."""
        if not os.path.exists(filename):
            return cls()
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                settings = cls(**json.load(f))
            settings.to_config().validate()
            return settings
        except (ValueError, TypeError) as e:
            print(f"\033[33mНе удалось прочитать {filename}: {e}. Используются значения по умолчанию\033[0m")
            return cls()

    def save(self, filename: str = CHECKSUM_CONFIG_FILE) -> None:
        """Сохраняет параметры в JSON файл."""
        self.to_config().validate()
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=4)

    def to_config(self) -> ChecksumConfig:
        return ChecksumConfig(self.bit_width, self.initial_value)

    @property
    def label(self) -> str:
        return f"Additive ({self.bit_width}-bit)"


@dataclass
class SerialConfig:
    baudrate: int = 9600
    bytesize: int = 8
    parity: str = 'N'  # N - none, E - even, O - odd
    stopbits: float = 1.0
    timeout: float = 0.1

    @classmethod
    def load(cls, filename: str = SERIAL_CONFIG_FILE) -> 'SerialConfig':
        """Загружает конфигурацию порта из JSON файла."""
        if not os.path.exists(filename):
            return cls()
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                return cls(**json.load(f))
        except (ValueError, TypeError) as e:
            print(f"\033[33mНе удалось прочитать {filename}: {e}. Используются значения по умолчанию\033[0m")
            return cls()

    def save(self, filename: str = SERIAL_CONFIG_FILE) -> None:
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=4)

    def to_dict(self) -> dict:
        """Преобразует конфигурацию в аргументы для serial.Serial."""
        return asdict(self)


def parse_initial_value(text: str) -> int:
    """Разбирает начальное значение регистра в hex (с префиксом 0x или без)."""
    text = text.strip().lower()
    if text.startswith('0x'):
        text = text[2:]
    value = int(text, 16)
    if value < 0:
        raise ValueError("отрицательное значение")
    return value


def print_checksum_settings(settings: ChecksumSettings):
    """Выводит текущие параметры контрольной суммы."""
    print("\n=== Параметры контрольной суммы ===")
    print(f"Разрядность: \033[1;36m{settings.bit_width}\033[0m бит")
    print(f"Начальное значение: \033[1;36m0x{settings.initial_value:X}\033[0m")
    print("=" * 35 + "\n")


def print_serial_config(config: SerialConfig):
    """Выводит текущую конфигурацию порта."""
    print("\n=== Параметры линии связи ===")
    print(f"Скорость линии: \033[1;36m{config.baudrate}\033[0m бод")
    print(f"Бит в символе: \033[1;36m{config.bytesize}\033[0m")
    print(f"Четность: \033[1;36m{config.parity}\033[0m")
    print(f"Стоповых бит: \033[1;36m{config.stopbits}\033[0m")
    print(f"Ожидание чтения: \033[1;36m{config.timeout}\033[0m сек")
    print("=" * 30 + "\n")


def configure_checksum(filename: str = CHECKSUM_CONFIG_FILE, ask=input) -> ChecksumSettings:
    """Интерактивная настройка разрядности и начального значения."""
    settings = ChecksumSettings.load(filename)
    print_checksum_settings(settings)

    if ask("Изменить параметры? (y/N): ").strip().lower() != 'y':
        return settings

    print("\nВведите новые значения (или Enter для сохранения текущего):")

    width = ask(f"Разрядность ({'/'.join(map(str, SUPPORTED_WIDTHS))}): ").strip()
    if width:
        try:
            if int(width) in SUPPORTED_WIDTHS:
                settings.bit_width = int(width)
            else:
                print("Неподдерживаемая разрядность, оставляем текущее значение")
        except ValueError:
            print("Оставляем текущее значение")

    initial = ask("Начальное значение (hex, например 0x1F): ").strip()
    if initial:
        try:
            settings.initial_value = parse_initial_value(initial)
        except ValueError:
            print("Оставляем текущее значение")

    settings.save(filename)
    print("\nНовые параметры:")
    print_checksum_settings(settings)
    return settings


def configure_port(filename: str = SERIAL_CONFIG_FILE, ask=input) -> SerialConfig:
    """Интерактивная настройка параметров COM-порта."""
    config = SerialConfig.load(filename)
    print_serial_config(config)

    if ask("Изменить настройки? (y/N): ").strip().lower() != 'y':
        return config

    print("\nВведите новые значения (или Enter для сохранения текущего):")

    baudrates = [300, 1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200]
    print("\nДоступные скорости:")
    for i, rate in enumerate(baudrates, 1):
        print(f"{i}: {rate}")
    try:
        choice = ask(f"Выберите скорость (1-{len(baudrates)}): ").strip()
        if choice:
            config.baudrate = baudrates[int(choice) - 1]
    except (ValueError, IndexError):
        print("Оставляем текущее значение")

    parity = ask("Четность (N/E/O): ").strip().upper()
    if parity in ['N', 'E', 'O']:
        config.parity = parity

    try:
        timeout = ask("Таймаут в секундах (например, 0.1): ").strip()
        if timeout:
            config.timeout = float(timeout)
    except ValueError:
        print("Оставляем текущее значение")

    config.save(filename)
    print("\nНовые настройки:")
    print_serial_config(config)
    return config
