"""
MotorCalc UI Module
===================

Terminal user interface for MotorCalc:

- TerminalPrompter: Line-based prompts with validation and redisplay
- wait_for_choice: Escape/Enter keypress reader for the restart prompt
- ensure_terminal: Relaunch inside a terminal emulator when needed
- MotorCalcCLI: The collect → analyze → display → restart loop

Usage:
------
    from src.ui import MotorCalcCLI

    MotorCalcCLI().run()
"""

from .bootstrap import TerminalNotFoundError, ensure_terminal
from .keypress import KeyChoice, wait_for_choice
from .motor_calc_cli import MotorCalcCLI, main
from .prompts import TerminalPrompter

__all__ = [
    "MotorCalcCLI",
    "TerminalPrompter",
    "KeyChoice",
    "wait_for_choice",
    "ensure_terminal",
    "TerminalNotFoundError",
    "main",
]
