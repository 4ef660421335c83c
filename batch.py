from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional
import os
import time
import uuid

from checksum import ChecksumConfig, compute_checksum

PENDING = 'pending'
PROCESSING = 'processing'
COMPLETED = 'completed'

SOURCES = ('content', 'name_size')


@dataclass
class BatchItem:
    name: str
    size: int
    data: bytes = b''
    checksum: Optional[str] = None
    status: str = PENDING
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:10])

    def source_text(self, source: str = 'content'):
        """Что подается на вход контрольной сумме."""
        if source == 'name_size':
            return f"{self.name}{self.size}"
        return self.data


def collect_files(paths: Iterable[str]) -> list[BatchItem]:
    """Создает элементы пакета из путей к файлам, пропуская каталоги."""
    items = []
    for path in paths:
        if not os.path.isfile(path):
            print(f"\033[33mПропущен {path}: не файл\033[0m")
            continue
        with open(path, 'rb') as f:
            data = f.read()
        items.append(BatchItem(name=os.path.basename(path), size=len(data), data=data))
    return items


def process_batch(items: list[BatchItem], config: ChecksumConfig, source: str = 'content',
                  delay: float = 0.0,
                  on_update: Callable[[BatchItem], None] = None) -> list[BatchItem]:
    """Последовательно считает контрольные суммы необработанных элементов."""
    if source not in SOURCES:
        raise ValueError(f"Неизвестный источник данных: {source}")
    config.validate()
    for item in items:
        if item.status == COMPLETED:
            continue
        item.status = PROCESSING
        if on_update:
            on_update(item)
        if delay:
            time.sleep(delay)
        item.checksum = compute_checksum(item.source_text(source), config)
        item.status = COMPLETED
        if on_update:
            on_update(item)
    return items
