from checksum import ChecksumConfig, SUPPORTED_WIDTHS, compute_checksum, verify_checksum


class Frame:
    START_BYTE = 0xFF
    STOP_BYTE = 0xFF
    HEADER_LEN = 3  # старт, разрядность, длина
    MAX_DATA = 255

    def __init__(self, data: bytes, bit_width: int, checksum: str):
        if len(data) > self.MAX_DATA:
            raise ValueError(f"Слишком длинные данные: {len(data)} > {self.MAX_DATA}")
        if bit_width not in SUPPORTED_WIDTHS:
            raise ValueError(f"Неподдерживаемая разрядность: {bit_width}")
        self.data = data
        self.bit_width = bit_width
        self.checksum = checksum

    @classmethod
    def build(cls, text: str, config: ChecksumConfig) -> 'Frame':
        """Создает кадр с контрольной суммой, посчитанной по тексту."""
        return cls(text.encode('utf-8'), config.bit_width, compute_checksum(text, config))

    @staticmethod
    def total_length(bit_width: int, length: int) -> int:
        return Frame.HEADER_LEN + length + bit_width // 8 + 1

    @property
    def text(self) -> str:
        return self.data.decode('utf-8', errors='replace')

    def to_bytes(self) -> bytes:
        checksum = int(self.checksum, 16).to_bytes(self.bit_width // 8, 'big')
        return bytes([
            self.START_BYTE,
            self.bit_width,
            len(self.data)
        ]) + self.data + checksum + bytes([self.STOP_BYTE])

    @staticmethod
    def from_bytes(raw: bytes) -> 'Frame':
        if len(raw) < Frame.HEADER_LEN + 2:
            raise ValueError("Кадр слишком короткий")
        if raw[0] != Frame.START_BYTE or raw[-1] != Frame.STOP_BYTE:
            raise ValueError("Неверные старт/стоп байты")

        bit_width = raw[1]
        length = raw[2]
        if bit_width not in SUPPORTED_WIDTHS:
            raise ValueError(f"Неподдерживаемая разрядность: {bit_width}")
        expected = Frame.total_length(bit_width, length)
        if len(raw) != expected:
            raise ValueError(f"Длина кадра: {len(raw)}, ожидаемая: {expected}")

        data = bytes(raw[Frame.HEADER_LEN:Frame.HEADER_LEN + length])
        checksum_bytes = raw[Frame.HEADER_LEN + length:-1]
        checksum = f"{int.from_bytes(checksum_bytes, 'big'):0{bit_width // 4}X}"
        return Frame(data, bit_width, checksum)

    def verify(self, config: ChecksumConfig) -> bool:
        """Пересчитывает сумму по принятому тексту и сравнивает с полученной."""
        if config.bit_width != self.bit_width:
            return False
        return verify_checksum(self.text, self.checksum, config)

    def __repr__(self):
        return f"Frame(width={self.bit_width}, checksum={self.checksum}, data={self.data})"
