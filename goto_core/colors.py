"""ANSI formatting for menu rows.

The color of an entry is a raw ``"R;G;B"`` string spliced into a true-color
foreground escape.  Nothing is validated: a bad color renders garbage, it
never raises.
"""

ESC = "\033["
FOREGROUND = "38;2;"
RESET = ESC + "0m"
UNDERLINE = ESC + "4m"
FAINT = ESC + "2m"


def colorize(color: str, text: str) -> str:
    """Wrap *text* in a true-color foreground escape for *color*.

    An empty *color* returns *text* untouched.  The trailing reset is
    skipped when *text* already ends with one, so the result can wrap
    other formatting (e.g. ``colorize(c, underline(name))``).
    """
    if not color:
        return text
    end = "" if text.endswith(RESET) else RESET
    return f"{ESC}{FOREGROUND}{color}m{text}{end}"


def underline(text: str) -> str:
    return f"{UNDERLINE}{text}{RESET}"


def faint(text: str) -> str:
    return f"{FAINT}{text}{RESET}"
