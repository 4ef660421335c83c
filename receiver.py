import serial
import sys

from checksum import compute_checksum
from config import ChecksumSettings, SerialConfig
from console import print_status_message
from frame import Frame
from history import HistoryLog
from link import LinkStats, choose_port, read_frame


def check_frame(frame: Frame, settings: ChecksumSettings, history: HistoryLog,
                stats: LinkStats = None) -> bool:
    """Проверяет целостность принятого кадра и записывает результат в журнал."""
    config = settings.to_config()
    calculated = compute_checksum(frame.text, config) if frame.data else ''
    ok = frame.verify(config)

    print("\n=== Получен новый фрейм ===")
    print(f"Сообщение: {frame.text}")
    print(f"Полученная сумма:    {frame.checksum} ({frame.bit_width} бит)")
    print(f"Рассчитанная сумма:  {calculated or '----'} ({settings.bit_width} бит)")
    if frame.bit_width != settings.bit_width:
        print_status_message("Разрядность отправителя не совпадает с локальной настройкой", "warning")

    if ok:
        print_status_message("INTEGRITY VERIFIED", "success")
    else:
        print_status_message("ALARM: CORRUPTION. Checksum mismatch, resource discarded", "error")
    history.add(settings.label, 'single', 'match' if ok else 'mismatch',
                f"Received: {frame.text[:20]}...")

    if stats is not None and stats.corrected:
        print_status_message(
            f"Исправлено кодов Хэмминга: {stats.corrected} из {stats.codewords}", "warning")
        history.add('Hamming (7,4)', 'correction', 'corrected',
                    f"Corrected {stats.corrected} of {stats.codewords} codewords")
    print("=" * 30)
    return ok


def main():
    port = choose_port(sys.argv)
    if not port:
        return

    settings = ChecksumSettings.load()
    history = HistoryLog.load()
    stats = LinkStats()
    ser = serial.Serial(port, **SerialConfig.load().to_dict())
    print(f"Ожидание данных на {port}...")

    try:
        while True:
            frame = read_frame(ser, stats)
            if frame:
                check_frame(frame, settings, history, stats)
                stats.reset()
    except KeyboardInterrupt:
        print("\nЗавершение работы...")
    finally:
        ser.close()


if __name__ == "__main__":
    main()
