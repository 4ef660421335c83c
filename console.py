COLORS = {
    "error": "\033[31m",    # красный
    "success": "\033[32m",  # зеленый
    "info": "\033[36m",     # голубой
    "warning": "\033[33m",  # желтый
}
RESET = "\033[0m"


def print_status_message(message: str, status: str = "info"):
    """Выводит статусное сообщение в соответствующем цвете."""
    color = COLORS.get(status, COLORS["info"])
    print(f"{color}{message}{RESET}")


def highlight(text: str) -> str:
    return f"\033[1;36m{text}{RESET}"


def format_codeword(codeword: str, marked: list[int] = ()) -> str:
    """Кодовое слово с подписью позиций; отмеченные позиции выделяются красным."""
    names = ['p1', 'p2', 'd1', 'p3', 'd2', 'd3', 'd4']
    head = ' '.join(f"{n:>2}" for n in names)
    cells = []
    for pos, bit in enumerate(codeword, 1):
        cell = f"{bit:>2}"
        cells.append(f"{COLORS['error']}{cell}{RESET}" if pos in marked else cell)
    return f"{head}\n{' '.join(cells)}"
