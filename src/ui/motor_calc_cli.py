"""
MotorCalc Terminal Interface
============================

Interactive loop around the calculator:

    collect → validate → search → display → ask to continue

Validation errors end the session with the same quit/restart choice as a
normal result.

Usage:
------
    from src.ui.motor_calc_cli import MotorCalcCLI

    MotorCalcCLI().run()

Pass ``--trace`` on the command line to print the calculation trace after
each result.
"""

import sys
from typing import Callable, Optional, TextIO

from src.motor_calc.config import MotorCalcConfig
from src.motor_calc.core import MotorCalculator
from src.motor_calc.debugger import CalculationDebugger
from src.motor_calc.validation import MotorValidationError

from .bootstrap import ensure_terminal
from .formatting import (
    format_analysis,
    format_clamp_warning,
    format_error,
    format_sweep_table,
)
from .keypress import KeyChoice, wait_for_choice
from .prompts import TerminalPrompter

TRACE_FLAG = "--trace"


class MotorCalcCLI:
    """
    Terminal front end for MotorCalc.

    Parameters:
    ----------
    config : MotorCalcConfig, optional
        Calculator and display settings.

    prompter : TerminalPrompter, optional
        Source of motor parameters.

    choice_reader : callable, optional
        Returns a KeyChoice after each session. Defaults to
        :func:`wait_for_choice`.

    output : file-like, optional
        Where results are written. Defaults to ``sys.stdout``.

    trace : bool
        Print the calculation trace after each session.
    """

    def __init__(
        self,
        config: Optional[MotorCalcConfig] = None,
        prompter: Optional[TerminalPrompter] = None,
        choice_reader: Optional[Callable[[], KeyChoice]] = None,
        output: Optional[TextIO] = None,
        trace: bool = False
    ):
        self.calculator = MotorCalculator(config)
        self.config = self.calculator.config
        self.output = output if output is not None else sys.stdout
        self.prompter = (
            prompter if prompter is not None
            else TerminalPrompter(output=self.output, config=self.config)
        )
        self.choice_reader = choice_reader if choice_reader is not None else wait_for_choice
        self.trace = trace

    def _write(self, text: str):
        self.output.write(text)
        self.output.flush()

    def run_session(self):
        """
        Collect one motor, analyze it and display the outcome.

        Raises:
        ------
        EOFError
            If input ends while prompting.
        """
        params = self.prompter.collect_parameters()

        debugger = None
        if self.trace:
            debugger = CalculationDebugger()
            debugger.start(kv=params.kv, voltage=params.voltage)

        try:
            result = self.calculator.analyze(params, debugger=debugger)
        except MotorValidationError as e:
            self._write(format_error(str(e)))
            self._write_trace(debugger)
            return

        if result.warning is not None:
            self._write(format_clamp_warning(result.warning, self.config))

        self._write(format_analysis(result, self.config))

        if self.config.show_sweep_table:
            self._write(format_sweep_table(
                self.calculator.sweep(result.params), self.config
            ))

        self._write_trace(debugger)

    def _write_trace(self, debugger: Optional[CalculationDebugger]):
        if debugger is None:
            return
        debugger.finish()
        self._write("\n" + debugger.get_report() + "\n")

    def run(self) -> int:
        """
        Run sessions until the user quits.

        Ctrl-C or end of input, while prompting or while waiting for the
        continue/quit key, ends the program cleanly.

        Returns:
        -------
        int
            Process exit code.
        """
        while True:
            try:
                self.run_session()
                choice = self.choice_reader()
            except (EOFError, KeyboardInterrupt):
                self._write("\n")
                return 0

            if choice is KeyChoice.QUIT:
                return 0


def main(argv=None) -> int:
    """Entry point: make sure a terminal is attached, then run the loop."""
    if argv is None:
        argv = sys.argv
    config = MotorCalcConfig()
    ensure_terminal(argv, title=config.terminal_title)
    return MotorCalcCLI(config, trace=TRACE_FLAG in argv).run()
