"""
Terminal UI Tests
=================

Tests prompts, keypress handling, terminal bootstrap, result formatting
and the restart loop using in-memory streams in place of a terminal.
"""

import io
import sys
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
import unittest
from unittest import mock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.motor_calc import MotorCalcConfig, MotorCalculator, MotorParameters
from src.motor_calc.validation import ClampedWarning
from src.ui.bootstrap import (
    TERMINAL_MARKER,
    TerminalNotFoundError,
    ensure_terminal,
    is_interactive,
    relaunch_in_terminal,
    terminal_commands,
)
from src.ui.formatting import (
    format_analysis,
    format_clamp_warning,
    format_sweep_table,
)
from src.ui.keypress import KeyChoice, interpret_key, wait_for_choice
from src.ui.motor_calc_cli import MotorCalcCLI, main
from src.ui.prompts import TerminalPrompter, parse_count, parse_number
import run_motor_calc


REFERENCE_MOTOR = MotorParameters(1000, 11.1, 0.5, 20, 100)


def scripted_input(lines):
    """Return an input function that replays ``lines`` then raises EOFError."""
    remaining = iter(lines)

    def read():
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError
    return read


class FakePrompter:
    """Hands out prepared parameter sets, then signals end of input."""

    def __init__(self, *params):
        self.params = list(params)
        self.calls = 0

    def collect_parameters(self):
        self.calls += 1
        if not self.params:
            raise EOFError
        return self.params.pop(0)


class TestParsing(unittest.TestCase):
    """Test value parsing used by the prompts."""

    def test_parse_number(self):
        self.assertEqual(parse_number("12.5"), 12.5)
        self.assertEqual(parse_number("  3 "), 3.0)
        self.assertIsNone(parse_number("abc"))
        self.assertIsNone(parse_number("-1"))
        self.assertIsNone(parse_number("0"))
        self.assertIsNone(parse_number("nan"))
        self.assertIsNone(parse_number("inf"))

    def test_parse_number_allow_zero(self):
        self.assertEqual(parse_number("0", allow_zero=True), 0.0)
        self.assertIsNone(parse_number("-0.1", allow_zero=True))

    def test_parse_count(self):
        self.assertEqual(parse_count("4"), 4)
        self.assertIsNone(parse_count("0"))
        self.assertIsNone(parse_count("2.5"))


class TestTerminalPrompter(unittest.TestCase):
    """Test the line-based prompt service."""

    def make_prompter(self, lines, config=None):
        self.output = io.StringIO()
        return TerminalPrompter(
            input_func=scripted_input(lines), output=self.output, config=config
        )

    def test_collect_direct_voltage(self):
        prompter = self.make_prompter(["1000", "y", "11.1", "0.5", "20", "100"])
        params = prompter.collect_parameters()
        self.assertEqual(params, REFERENCE_MOTOR)
        self.assertIn("Kv: 1000.0", self.output.getvalue())
        self.assertIn("Enter voltage directly?: ✓", self.output.getvalue())

    def test_collect_cell_count(self):
        prompter = self.make_prompter(["1000", "n", "3", "0.5", "20", "100"])
        params = prompter.collect_parameters()
        self.assertAlmostEqual(params.voltage, 11.1)
        self.assertIn("Enter voltage directly?: X", self.output.getvalue())
        self.assertIn("Voltage: 11.10 (3 cells)", self.output.getvalue())

    def test_cell_voltage_from_config(self):
        """3 cells × 4.2 V = 12.6 V with a charged-cell setting."""
        prompter = self.make_prompter(
            ["1000", "n", "3", "0.5", "20", "100"],
            config=MotorCalcConfig(nominal_cell_voltage=4.2)
        )
        params = prompter.collect_parameters()
        self.assertAlmostEqual(params.voltage, 12.6)
        self.assertIn("Voltage: 12.60 (3 cells)", self.output.getvalue())

    def test_retries_invalid_entries(self):
        prompter = self.make_prompter(["abc", "-5", "", "1000"])
        value = prompter.request_float("Kv")
        self.assertEqual(value, 1000.0)
        self.assertEqual(self.output.getvalue().count("Invalid entry, try again."), 2)

    def test_zero_allowed_only_when_requested(self):
        prompter = self.make_prompter(["0", "0"])
        self.assertEqual(prompter.request_float("resistance", allow_zero=True), 0.0)
        with self.assertRaises(EOFError):
            prompter.request_float("Kv")

    def test_yes_no(self):
        prompter = self.make_prompter(["maybe", "NO", ""])
        self.assertFalse(prompter.request_yes_no("Continue?"))
        self.assertTrue(prompter.request_yes_no("Continue?"))

    def test_prompt_lines_cleared(self):
        """Two prompts and one error line are erased on success."""
        prompter = self.make_prompter(["x", "5"])
        prompter.request_float("Kv")
        self.assertIn("\x1b[3A\x1b[J", self.output.getvalue())

    def test_eof_propagates(self):
        prompter = self.make_prompter([])
        with self.assertRaises(EOFError):
            prompter.collect_parameters()


class TestKeypress(unittest.TestCase):
    """Test the quit/restart keypress reader."""

    def test_interpret_key(self):
        self.assertIs(interpret_key("\x1b"), KeyChoice.QUIT)
        self.assertIs(interpret_key("\n"), KeyChoice.CONTINUE)
        self.assertIs(interpret_key("\r"), KeyChoice.CONTINUE)
        self.assertIsNone(interpret_key("q"))

    def test_enter_continues(self):
        output = io.StringIO()
        self.assertIs(wait_for_choice(io.StringIO("\n"), output), KeyChoice.CONTINUE)
        self.assertIn("Press [Esc] to quit", output.getvalue())

    def test_escape_quits(self):
        self.assertIs(wait_for_choice(io.StringIO("\x1b\n"), io.StringIO()), KeyChoice.QUIT)

    def test_other_keys_ignored(self):
        self.assertIs(wait_for_choice(io.StringIO("abc\n"), io.StringIO()), KeyChoice.CONTINUE)

    def test_end_of_input_quits(self):
        self.assertIs(wait_for_choice(io.StringIO(""), io.StringIO()), KeyChoice.QUIT)


class TestBootstrap(unittest.TestCase):
    """Test relaunching inside a terminal emulator."""

    def test_terminal_commands(self):
        commands = terminal_commands(["python", "motorcalc"], "MotorCalc")
        self.assertEqual(
            [c[0] for c in commands],
            ["x-terminal-emulator", "gnome-terminal", "konsole", "xfce4-terminal", "xterm"]
        )
        for command in commands:
            self.assertEqual(command[-2:], ["python", "motorcalc"])

    def test_skips_missing_emulators(self):
        calls = []

        def fake_execvp(name, args):
            calls.append(name)
            if name in ("x-terminal-emulator", "gnome-terminal"):
                raise FileNotFoundError(name)

        command = relaunch_in_terminal(["prog"], execvp=fake_execvp)
        self.assertEqual(command[0], "konsole")
        self.assertEqual(calls, ["x-terminal-emulator", "gnome-terminal", "konsole"])

    def test_no_emulator_found(self):
        def fake_execvp(name, args):
            raise FileNotFoundError(name)

        with self.assertRaises(TerminalNotFoundError):
            relaunch_in_terminal(["prog"], execvp=fake_execvp)

    def test_other_errors_propagate(self):
        def fake_execvp(name, args):
            raise PermissionError(name)

        with self.assertRaises(PermissionError):
            relaunch_in_terminal(["prog"], execvp=fake_execvp)

    def test_interactive_does_not_relaunch(self):
        calls = []
        relaunched = ensure_terminal(
            ["run_motor_calc.py"], execvp=lambda *a: calls.append(a), interactive=True
        )
        self.assertFalse(relaunched)
        self.assertEqual(calls, [])

    def test_marker_prevents_second_relaunch(self):
        calls = []
        relaunched = ensure_terminal(
            ["run_motor_calc.py", TERMINAL_MARKER],
            execvp=lambda *a: calls.append(a), interactive=False
        )
        self.assertFalse(relaunched)
        self.assertEqual(calls, [])

    def test_relaunch_passes_marker(self):
        calls = []
        relaunched = ensure_terminal(
            ["run_motor_calc.py"], execvp=lambda name, args: calls.append(args),
            interactive=False
        )
        self.assertTrue(relaunched)
        self.assertEqual(calls[0][-1], TERMINAL_MARKER)
        self.assertTrue(calls[0][-2].endswith("run_motor_calc.py"))

    def test_streams_are_not_interactive(self):
        self.assertFalse(is_interactive(io.StringIO(), io.StringIO()))


class TestFormatting(unittest.TestCase):
    """Test terminal output formatting."""

    def test_analysis_blocks(self):
        result = MotorCalculator().analyze(REFERENCE_MOTOR)
        text = format_analysis(result)

        self.assertIn("At maximum output power:", text)
        self.assertIn("At maximum efficiency:", text)
        self.assertIn("20.00 A", text)
        self.assertIn(" RPM", text)
        self.assertIn(" Ncm", text)
        self.assertIn(" HP)", text)

    def test_precision_setting(self):
        result = MotorCalculator().analyze(REFERENCE_MOTOR)
        text = format_analysis(result, MotorCalcConfig(display_precision=3))
        self.assertIn("20.000 A", text)

    def test_clamp_warning(self):
        text = format_clamp_warning(ClampedWarning(20.0, 11.1001))
        self.assertIn("Warning:", text)
        self.assertIn("11.10 A", text)

    def test_sweep_table(self):
        calculator = MotorCalculator()
        text = format_sweep_table(calculator.sweep(REFERENCE_MOTOR, num_points=4))
        lines = text.strip().splitlines()
        # Title, header, rule, four rows
        self.assertEqual(len(lines), 7)
        self.assertIn("Current (A)", lines[1])


class TestMotorCalcCLI(unittest.TestCase):
    """Test the collect → analyze → display → restart loop."""

    def make_cli(self, prompter, choices, config=None, trace=False):
        self.output = io.StringIO()
        remaining = iter(choices)
        return MotorCalcCLI(
            config=config,
            prompter=prompter,
            choice_reader=lambda: next(remaining),
            output=self.output,
            trace=trace
        )

    def test_single_session(self):
        cli = self.make_cli(FakePrompter(REFERENCE_MOTOR), [KeyChoice.QUIT])
        self.assertEqual(cli.run(), 0)

        text = self.output.getvalue()
        self.assertIn("At maximum output power:", text)
        self.assertIn("Performance across the current range:", text)
        self.assertNotIn("Warning:", text)

    def test_sweep_table_can_be_disabled(self):
        cli = self.make_cli(
            FakePrompter(REFERENCE_MOTOR), [KeyChoice.QUIT],
            config=MotorCalcConfig(show_sweep_table=False)
        )
        cli.run()
        self.assertNotIn("Performance across the current range:", self.output.getvalue())

    def test_validation_error_shown(self):
        narrow = MotorParameters(1000, 11.1, 5.0, 5.005, 100)
        cli = self.make_cli(FakePrompter(narrow), [KeyChoice.QUIT])
        cli.run()

        text = self.output.getvalue()
        self.assertIn("Error: Maximum current is less than", text)
        self.assertNotIn("At maximum output power:", text)

    def test_clamp_warning_shown(self):
        clamped = MotorParameters(1000, 11.1, 0.5, 20.0, 1000)
        cli = self.make_cli(FakePrompter(clamped), [KeyChoice.QUIT])
        cli.run()
        self.assertIn("Maximum current has been reduced", self.output.getvalue())

    def test_restart_runs_again(self):
        prompter = FakePrompter(REFERENCE_MOTOR, REFERENCE_MOTOR)
        cli = self.make_cli(prompter, [KeyChoice.CONTINUE, KeyChoice.QUIT])
        cli.run()

        self.assertEqual(prompter.calls, 2)
        self.assertEqual(self.output.getvalue().count("At maximum efficiency:"), 2)

    def test_end_of_input_exits(self):
        prompter = FakePrompter()
        cli = self.make_cli(prompter, [])
        self.assertEqual(cli.run(), 0)
        self.assertEqual(prompter.calls, 1)

    def test_interrupt_at_choice_exits(self):
        """Ctrl-C while waiting for Enter/Esc ends the loop with status 0."""
        def interrupted():
            raise KeyboardInterrupt

        prompter = FakePrompter(REFERENCE_MOTOR, REFERENCE_MOTOR)
        cli = MotorCalcCLI(
            prompter=prompter,
            choice_reader=interrupted,
            output=io.StringIO()
        )
        self.assertEqual(cli.run(), 0)
        self.assertEqual(prompter.calls, 1)

    def test_trace_printed_when_enabled(self):
        cli = self.make_cli(FakePrompter(REFERENCE_MOTOR), [KeyChoice.QUIT], trace=True)
        cli.run()

        text = self.output.getvalue()
        self.assertIn("MOTORCALC CALCULATION TRACE", text)
        self.assertIn("INPUT PARAMETERS", text)
        self.assertIn("Maximize", text)

    def test_trace_after_validation_error(self):
        narrow = MotorParameters(1000, 11.1, 5.0, 5.005, 100)
        cli = self.make_cli(FakePrompter(narrow), [KeyChoice.QUIT], trace=True)
        cli.run()

        text = self.output.getvalue()
        self.assertIn("Error: Maximum current is less than", text)
        self.assertIn("MOTORCALC CALCULATION TRACE", text)

    def test_no_trace_by_default(self):
        cli = self.make_cli(FakePrompter(REFERENCE_MOTOR), [KeyChoice.QUIT])
        cli.run()
        self.assertNotIn("MOTORCALC CALCULATION TRACE", self.output.getvalue())

    def test_trace_flag_from_command_line(self):
        with mock.patch.object(MotorCalcCLI, "run", autospec=True, return_value=0) as run:
            self.assertEqual(main(["run_motor_calc.py", "--trace", TERMINAL_MARKER]), 0)
            self.assertEqual(main(["run_motor_calc.py", TERMINAL_MARKER]), 0)

        traced, plain = [c[0][0] for c in run.call_args_list]
        self.assertTrue(traced.trace)
        self.assertFalse(plain.trace)


class TestLauncher(unittest.TestCase):
    """Test the run_motor_calc.py banner and exit handling."""

    def run_launcher(self, interactive):
        output = io.StringIO()
        with mock.patch("src.ui.bootstrap.is_interactive", return_value=interactive), \
                mock.patch("src.ui.motor_calc_cli.main", return_value=0), \
                mock.patch.object(sys, "argv", ["run_motor_calc.py"]), \
                redirect_stdout(output):
            with self.assertRaises(SystemExit) as ctx:
                run_motor_calc.main()
        return ctx.exception.code, output.getvalue()

    def test_dependency_versions_shown(self):
        import numpy
        import scipy

        code, text = self.run_launcher(interactive=True)
        self.assertEqual(code, 0)
        self.assertIn(f"[OK] numpy {numpy.__version__}", text)
        self.assertIn(f"[OK] scipy {scipy.__version__}", text)

    def test_quiet_without_terminal(self):
        code, text = self.run_launcher(interactive=False)
        self.assertEqual(code, 0)
        self.assertNotIn("[OK]", text)

    def test_unexpected_error_exits_nonzero(self):
        output = io.StringIO()
        with mock.patch("src.ui.bootstrap.is_interactive", return_value=False), \
                mock.patch("src.ui.motor_calc_cli.main", side_effect=RuntimeError("boom")), \
                mock.patch.object(sys, "argv", ["run_motor_calc.py"]), \
                redirect_stdout(output), \
                redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                run_motor_calc.main()

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("[ERROR] MotorCalc stopped: boom", output.getvalue())


def run_validation():
    """Run all UI tests and print summary."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    print()
    print("=" * 60)
    if result.wasSuccessful():
        print("All UI tests PASSED")
    else:
        print(f"FAILED: {len(result.failures)} failures, {len(result.errors)} errors")
    print("=" * 60)

    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
