import serial
import sys

from config import ChecksumSettings, SerialConfig, configure_checksum, print_checksum_settings
from console import print_status_message, highlight
from frame import Frame
from history import HistoryLog
from link import choose_port, send_frame


def safe_input(prompt: str) -> str:
    """Ввод с защитой от ошибок декодирования терминала."""
    try:
        return input(prompt).strip()
    except UnicodeDecodeError:
        print("Ошибка при вводе текста. Попробуйте ещё раз.")
        return ""


def tamper(frame: Frame) -> Frame:
    """Портит первый символ данных, оставляя исходную контрольную сумму."""
    if not frame.data:
        return frame
    data = bytes([frame.data[0] ^ 0x01]) + frame.data[1:]
    return Frame(data, frame.bit_width, frame.checksum)


def print_help():
    """Выводит справку по командам."""
    print("\n\033[1mДоступные команды:\033[0m")
    print("  \033[36mstatus\033[0m        - параметры контрольной суммы и шум линии")
    print("  \033[36mconfig\033[0m        - изменить разрядность и начальное значение")
    print("  \033[33mnoise <p>\033[0m     - вероятность искажения бита в каждом коде (0..1)")
    print("  \033[31mtamper <text>\033[0m - отправить текст с испорченным символом")
    print("  \033[33mexit\033[0m          - выход")
    print("  \033[36mhelp\033[0m          - показать эту справку")
    print("\033[1mЧтобы отправить сообщение, просто введите текст.\033[0m\n")


def transmit(ser, text: str, settings: ChecksumSettings, history: HistoryLog,
             noise: float = 0.0, corrupt: bool = False):
    frame = Frame.build(text, settings.to_config())
    if corrupt:
        frame = tamper(frame)
    send_frame(ser, frame, noise=noise)
    print_status_message(f"Отправлено [{frame.checksum}]: {text}", "success")
    history.add(settings.label, 'single', 'info', f"Transmitted: {text[:20]}...")
    return frame


def main():
    port = choose_port(sys.argv, ask=safe_input)
    if not port:
        return

    settings = ChecksumSettings.load()
    history = HistoryLog.load()
    noise = 0.0
    ser = serial.Serial(port, **SerialConfig.load().to_dict())
    print(f"Подключено к {port}")
    print(f"Контрольная сумма: {highlight(settings.label)}, начальное значение 0x{settings.initial_value:X}")
    print_help()

    try:
        while True:
            command = safe_input("\033[1;37m[READY]\033[0m> ")
            if not command:
                continue
            name, _, arg = command.partition(' ')
            name = name.lower()

            if name == 'exit':
                break
            elif name == 'help':
                print_help()
            elif name == 'status':
                print_checksum_settings(settings)
                print_status_message(f"Шум линии: {noise:.2f}", "info")
            elif name == 'config':
                settings = configure_checksum(ask=safe_input)
            elif name == 'noise':
                try:
                    value = float(arg)
                    if not 0.0 <= value <= 1.0:
                        raise ValueError
                    noise = value
                    print_status_message(f"Шум линии: {noise:.2f}", "warning")
                except ValueError:
                    print_status_message("Вероятность должна быть числом от 0 до 1", "error")
            elif name == 'tamper':
                if not arg:
                    print_status_message("Укажите текст сообщения", "error")
                    continue
                try:
                    transmit(ser, arg, settings, history, noise, corrupt=True)
                except (ValueError, serial.SerialException) as e:
                    print_status_message(f"Ошибка: {e}", "error")
            else:
                try:
                    transmit(ser, command, settings, history, noise)
                except (ValueError, serial.SerialException) as e:
                    print_status_message(f"Ошибка: {e}", "error")

    except KeyboardInterrupt:
        print_status_message("\nЗавершение работы...", "warning")
    finally:
        ser.close()


if __name__ == "__main__":
    main()
