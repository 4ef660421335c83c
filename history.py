from dataclasses import dataclass, asdict, field
import json
import os
import time
import uuid

HISTORY_FILE = 'integrity_history.json'
MAX_ENTRIES = 50

ENTRY_TYPES = ('single', 'batch', 'correction')
ENTRY_RESULTS = ('match', 'mismatch', 'corrected', 'info')


@dataclass
class HistoryEntry:
    algorithm: str
    type: str
    result: str
    summary: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:10])
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if self.type not in ENTRY_TYPES:
            raise ValueError(f"Неизвестный тип записи: {self.type}")
        if self.result not in ENTRY_RESULTS:
            raise ValueError(f"Неизвестный результат: {self.result}")

    def __str__(self) -> str:
        stamp = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(self.timestamp))
        return f"[{stamp}] {self.type:<10} {self.result:<9} {self.algorithm}: {self.summary}"


class HistoryLog:
    """Журнал проверок целостности, новые записи первыми."""

    def __init__(self, filename: str = HISTORY_FILE, limit: int = MAX_ENTRIES):
        self.filename = filename
        self.limit = limit
        self.entries: list[HistoryEntry] = []

    @classmethod
    def load(cls, filename: str = HISTORY_FILE) -> 'HistoryLog':
        log = cls(filename)
        if os.path.exists(filename):
            try:
                with open(filename, 'r', encoding='utf-8') as f:
                    log.entries = [HistoryEntry(**item) for item in json.load(f)][:log.limit]
            except (ValueError, TypeError) as e:
                print(f"\033[33mЖурнал {filename} поврежден ({e}), начинаем новый\033[0m")
                log.entries = []
        return log

    def save(self) -> None:
        with open(self.filename, 'w', encoding='utf-8') as f:
            json.dump([asdict(e) for e in self.entries], f, indent=4, ensure_ascii=False)

    def add(self, algorithm: str, type: str, result: str, summary: str) -> HistoryEntry:
        entry = HistoryEntry(algorithm=algorithm, type=type, result=result, summary=summary)
        self.entries = [entry] + self.entries[:self.limit - 1]
        self.save()
        return entry

    def clear(self) -> None:
        self.entries = []
        if os.path.exists(self.filename):
            os.remove(self.filename)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
