"""
Terminal Prompts
================

Line-based prompts that collect motor parameters from the keyboard.

Each prompt repeats until the entry parses and satisfies its constraint.
On success the prompt and any error lines are erased with ANSI cursor
control and replaced by a single ``Name: value`` line, so the finished
form reads as a clean summary of the inputs.

Usage:
------
    from src.ui.prompts import TerminalPrompter

    prompter = TerminalPrompter()
    params = prompter.collect_parameters()
"""

import math
import sys
from typing import Callable, Optional, TextIO

from src.motor_calc.config import MotorCalcConfig, DEFAULT_CONFIG
from src.motor_calc.models import MotorParameters


# ANSI control sequences
SAVE_CURSOR = "\x1b[s"
RESTORE_CURSOR = "\x1b[u"
RED = "\x1b[31m"
RESET = "\x1b[0m"

YES_ANSWERS = ("yes", "y", "")
NO_ANSWERS = ("no", "n")

INVALID_ENTRY = f"{RED}Invalid entry, try again.{RESET}\n"


def clear_lines(count: int) -> str:
    """ANSI sequence moving up ``count`` lines and clearing to the end."""
    return f"\x1b[{count}A\x1b[J"


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def parse_number(text: str, allow_zero: bool = False) -> Optional[float]:
    """
    Parse a finite number that is positive (or non-negative).

    Returns:
    -------
    float or None
        The value, or None if the text is malformed or out of range.
    """
    try:
        value = float(text.strip())
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    if allow_zero:
        return value if value >= 0 else None
    return value if value > 0 else None


def parse_count(text: str) -> Optional[int]:
    """Parse a strictly positive whole number."""
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if value > 0 else None


class TerminalPrompter:
    """
    Collects validated values from a line-based terminal.

    Parameters:
    ----------
    input_func : callable, optional
        Reads one line without the trailing newline. Defaults to ``input``.

    output : file-like, optional
        Stream prompts are written to. Defaults to ``sys.stdout``.

    config : MotorCalcConfig, optional
        Supplies the nominal cell voltage for cell-count entry.
    """

    def __init__(
        self,
        input_func: Optional[Callable[[], str]] = None,
        output: Optional[TextIO] = None,
        config: Optional[MotorCalcConfig] = None
    ):
        self.input_func = input_func if input_func is not None else input
        self.output = output if output is not None else sys.stdout
        self.config = config if config is not None else DEFAULT_CONFIG

    def _write(self, text: str):
        self.output.write(text)
        self.output.flush()

    def _request(self, what: str, parse: Callable[[str], Optional[float]]):
        printed_lines = 0

        while True:
            self._write(f"Enter {what}: {SAVE_CURSOR}")
            printed_lines += 1

            text = self.input_func()
            while not text.strip():
                # Blank entry, ask again on the same line
                self._write(RESTORE_CURSOR)
                text = self.input_func()

            value = parse(text)
            if value is not None:
                self._write(clear_lines(printed_lines))
                self._write(f"{capitalize_first(what)}: {value}\n")
                return value

            self._write(INVALID_ENTRY)
            printed_lines += 1

    def request_float(self, what: str, allow_zero: bool = False) -> float:
        """
        Prompt until a positive (or, with ``allow_zero``, non-negative)
        number is entered.

        Raises:
        ------
        EOFError
            If the input stream is closed.
        """
        return self._request(what, lambda text: parse_number(text, allow_zero))

    def request_count(self, what: str) -> int:
        """Prompt until a positive whole number is entered."""
        return self._request(what, parse_count)

    def request_yes_no(self, question: str) -> bool:
        """
        Ask a yes/no question. An empty answer counts as yes.

        Returns:
        -------
        bool
            True for yes, False for no.
        """
        printed_lines = 0

        while True:
            self._write(f"{question} [Y/n]: ")
            printed_lines += 1

            answer = self.input_func().strip().lower()

            if answer in YES_ANSWERS or answer in NO_ANSWERS:
                result = answer in YES_ANSWERS
                self._write(clear_lines(printed_lines))
                self._write(f"{capitalize_first(question)}: {'✓' if result else 'X'}\n")
                return result

            self._write(INVALID_ENTRY)
            printed_lines += 1

    def collect_parameters(self) -> MotorParameters:
        """
        Ask for every motor parameter.

        Voltage is entered either directly or as a cell count, in which case
        voltage = cells × nominal cell voltage.

        Returns:
        -------
        MotorParameters
            Raw, unvalidated parameters.
        """
        kv = self.request_float("Kv")

        cells = None
        if self.request_yes_no("Enter voltage directly?"):
            voltage = self.request_float("voltage")
        else:
            cells = self.request_count("cell count")

        no_load_current = self.request_float("unloaded current (A)", allow_zero=True)
        max_current = self.request_float("maximum current (A)")
        armature_resistance = self.request_float("armature resistance (mΩ)", allow_zero=True)

        if cells is None:
            return MotorParameters(
                kv=kv,
                voltage=voltage,
                no_load_current=no_load_current,
                max_current=max_current,
                armature_resistance=armature_resistance,
            )

        params = MotorParameters.from_cell_count(
            kv, cells, no_load_current, max_current, armature_resistance,
            cell_voltage=self.config.nominal_cell_voltage
        )
        self._write(
            f"Voltage: {params.voltage:.{self.config.display_precision}f} "
            f"({cells} cells)\n"
        )
        return params
