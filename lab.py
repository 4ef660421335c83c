import shlex
from typing import Optional

from batch import BatchItem, collect_files, process_batch
from checksum import compute_checksum, verify_checksum
from config import ChecksumSettings, configure_checksum, print_checksum_settings
from console import format_codeword, highlight, print_status_message
from errors import IntegrityError
from hamming import HammingTrial
from history import HistoryLog

BATCH_DELAY = 0.4


class Lab:
    """Состояние интерактивной лаборатории: отправитель, получатель, код Хэмминга."""

    def __init__(self, settings: ChecksumSettings, history: HistoryLog, batch_delay: float = BATCH_DELAY):
        self.settings = settings
        self.history = history
        self.batch_delay = batch_delay
        self.sent_text = None
        self.sent_checksum = ''
        self.trial = None

    def checksum(self, text: str) -> str:
        """Пустое сообщение дает пустой результат, как в окне отправителя."""
        if not text:
            return ''
        return compute_checksum(text, self.settings.to_config())

    def transmit(self, text: str) -> str:
        self.sent_text = text
        self.sent_checksum = self.checksum(text)
        self.history.add(self.settings.label, 'single', 'info', f"Transmitted: {text[:20]}...")
        return self.sent_checksum

    def receive(self, text: str) -> Optional[bool]:
        """Сверяет сумму принятого текста с переданной; None, если сверять нечего."""
        if self.sent_text is None:
            raise ValueError("Сначала передайте сообщение командой send")
        if not text or not self.sent_checksum:
            return None
        ok = verify_checksum(text, self.sent_checksum, self.settings.to_config())
        self.history.add(self.settings.label, 'single', 'match' if ok else 'mismatch',
                         f"Received: {text[:20]}...")
        return ok

    def encode(self, payload: str) -> HammingTrial:
        self.trial = HammingTrial.start(payload)
        return self.trial

    def flip(self, position: int) -> HammingTrial:
        """Инвертирует бит на позиции 1-7 принятого слова и декодирует заново."""
        if self.trial is None:
            raise ValueError("Сначала закодируйте данные командой encode")
        self.trial = self.trial.flip(position - 1)
        if self.trial.error_position:
            result = 'corrected' if self.trial.recovered else 'mismatch'
            self.history.add('Hamming (7,4)', 'correction', result,
                             f"{self.trial.received}: error at bit {self.trial.error_position}, "
                             f"data {self.trial.corrected}")
        return self.trial

    def batch(self, paths: list[str], source: str = 'content', on_update=None) -> list[BatchItem]:
        items = collect_files(paths)
        if not items:
            return items
        process_batch(items, self.settings.to_config(), source, self.batch_delay, on_update)
        self.history.add(self.settings.label, 'batch', 'info', f"Batch processed {len(items)} files.")
        return items


def print_help():
    """Выводит справку по командам."""
    print("\n\033[1mДоступные команды:\033[0m")
    print("  \033[36mchecksum <text>\033[0m     - контрольная сумма текста")
    print("  \033[32msend <text>\033[0m         - передать текст получателю вместе с суммой")
    print("  \033[32mrecv <text>\033[0m         - проверить принятый (возможно измененный) текст")
    print("  \033[36mbatch [-n] <files>\033[0m  - суммы файлов (-n: по имени и размеру)")
    print("  \033[36mencode <4 бита>\033[0m     - закодировать данные кодом Хэмминга (7,4)")
    print("  \033[31mflip <1-7>\033[0m          - инвертировать бит принятого кодового слова")
    print("  \033[36mhistory\033[0m             - журнал проверок")
    print("  \033[33mclear\033[0m               - очистить журнал")
    print("  \033[36mconfig\033[0m              - параметры контрольной суммы")
    print("  \033[33mexit\033[0m                - выход")
    print("  \033[36mhelp\033[0m                - показать эту справку\n")


def print_trial(trial: HammingTrial):
    print(f"Данные:        {trial.original}")
    print(f"Код:           {trial.encoded}")
    print("Принято:")
    print(format_codeword(trial.received, trial.flipped_positions))
    if trial.error_position:
        print_status_message(f"Ошибка в позиции {trial.error_position}", "warning")
    else:
        print_status_message("Синдром нулевой, ошибок не обнаружено", "info")
    status = "success" if trial.recovered else "error"
    print_status_message(f"Декодировано: {trial.corrected}", status)


def print_batch_item(item: BatchItem):
    print(f"  {item.name:<30} {item.size:>10} байт  {item.status:<10} {item.checksum or 'AWAITING'}")


def handle_command(lab: Lab, command: str) -> bool:
    """Выполняет одну команду; возвращает False для выхода."""
    name, _, arg = command.partition(' ')
    name = name.lower()

    if name == 'exit':
        return False
    elif name == 'help':
        print_help()
    elif name == 'checksum':
        print(f"{lab.settings.label}: {highlight(lab.checksum(arg) or '----')}")
    elif name == 'send':
        checksum = lab.transmit(arg)
        print_status_message(f"Передано: {arg!r}, сумма {checksum or '----'}", "success")
    elif name == 'recv':
        calculated = lab.checksum(arg)
        verdict = lab.receive(arg)
        if verdict is None:
            print_status_message("LISTENING... нет обеих контрольных сумм для сверки", "info")
        elif verdict:
            print_status_message(f"INTEGRITY VERIFIED ({calculated or '----'})", "success")
        else:
            print_status_message(
                f"ALARM: CORRUPTION. Получено {lab.sent_checksum or '----'}, "
                f"рассчитано {calculated or '----'}", "error")
    elif name == 'batch':
        args = shlex.split(arg)
        source = 'content'
        if args and args[0] == '-n':
            source = 'name_size'
            args = args[1:]
        if not args:
            print_status_message("Укажите файлы", "error")
            return True
        items = lab.batch(args, source, on_update=print_batch_item)
        if not items:
            print_status_message("Нет файлов для обработки", "warning")
    elif name == 'encode':
        print_trial(lab.encode(arg.strip()))
    elif name == 'flip':
        try:
            position = int(arg)
        except ValueError:
            print_status_message("Позиция должна быть числом от 1 до 7", "error")
            return True
        if not 1 <= position <= 7:
            print_status_message("Позиция должна быть числом от 1 до 7", "error")
            return True
        print_trial(lab.flip(position))
    elif name == 'history':
        if not len(lab.history):
            print_status_message("Журнал пуст", "info")
        for entry in lab.history:
            print(entry)
    elif name == 'clear':
        lab.history.clear()
        print_status_message("Журнал очищен", "warning")
    elif name == 'config':
        lab.settings = configure_checksum()
    else:
        print_status_message(f"Неизвестная команда: {name}. Введите help", "error")
    return True


def main():
    settings = ChecksumSettings.load()
    lab = Lab(settings, HistoryLog.load())
    print_checksum_settings(settings)
    print_help()

    try:
        while True:
            command = input("\033[1;37m[LAB]\033[0m> ").strip()
            if not command:
                continue
            try:
                if not handle_command(lab, command):
                    break
            except (IntegrityError, ValueError) as e:
                print_status_message(f"Ошибка: {e}", "error")
    except (KeyboardInterrupt, EOFError):
        print_status_message("\nЗавершение работы...", "warning")


if __name__ == "__main__":
    main()
