"""
Terminal Bootstrap
==================

When the program is started without a terminal (for example by
double-clicking it in a file manager) it re-executes itself inside the
first terminal emulator found on the system.

The relaunched process receives ``--in-terminal`` so it never tries to
bootstrap a second time.
"""

import os
import sys
from typing import Callable, List, Optional, Sequence


TERMINAL_MARKER = "--in-terminal"


class TerminalNotFoundError(RuntimeError):
    """No supported terminal emulator could be launched."""


def is_interactive(stdin=None, stdout=None) -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    try:
        return stdin.isatty() and stdout.isatty()
    except (AttributeError, ValueError):
        return False


def terminal_commands(program: Sequence[str], title: str = "MotorCalc") -> List[List[str]]:
    """
    Build launch commands for the supported terminal emulators.

    Parameters:
    ----------
    program : sequence of str
        Command line to run inside the terminal.

    title : str
        Window title.

    Returns:
    -------
    list
        One argv list per emulator, in order of preference.
    """
    program = list(program)
    return [
        ["x-terminal-emulator", f"--title={title}", "-x"] + program,
        ["gnome-terminal", "-t", title, "--"] + program,
        ["konsole", "-p", f"tabtitle={title}", "-e"] + program,
        ["xfce4-terminal", f"-T={title}", "-x"] + program,
        ["xterm", "-T", title, "-e"] + program,
    ]


def relaunch_in_terminal(
    program: Sequence[str],
    title: str = "MotorCalc",
    execvp: Callable[[str, List[str]], None] = os.execvp
):
    """
    Replace the current process with ``program`` running in a terminal.

    Emulators that are not installed are skipped. Any other OS error is
    raised. Returns the command used only if ``execvp`` returns.

    Raises:
    ------
    TerminalNotFoundError
        If none of the supported emulators exists.
    """
    for command in terminal_commands(program, title):
        try:
            execvp(command[0], command)
        except FileNotFoundError:
            continue
        return command

    raise TerminalNotFoundError("Usable terminal could not be found")


def ensure_terminal(
    argv: Optional[Sequence[str]] = None,
    title: str = "MotorCalc",
    execvp: Callable[[str, List[str]], None] = os.execvp,
    interactive: Optional[bool] = None
) -> bool:
    """
    Relaunch inside a terminal emulator if not already attached to one.

    Parameters:
    ----------
    argv : sequence of str, optional
        Command line of this process. Defaults to ``sys.argv``.

    title : str
        Window title for the new terminal.

    execvp : callable
        Process replacement function.

    interactive : bool, optional
        Overrides the TTY check.

    Returns:
    -------
    bool
        False when the current process should go on running itself. A
        successful relaunch replaces the process, so True is only seen with
        a substitute ``execvp``.
    """
    if argv is None:
        argv = sys.argv
    if interactive is None:
        interactive = is_interactive()

    if interactive or TERMINAL_MARKER in argv:
        return False

    program = [sys.executable, os.path.abspath(argv[0])] + list(argv[1:]) + [TERMINAL_MARKER]
    relaunch_in_terminal(program, title, execvp)
    return True
