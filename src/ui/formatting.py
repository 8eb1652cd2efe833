"""
Result Formatting
=================

ANSI-colored text blocks for the terminal UI: the two result blocks,
validation errors, the clamp warning and the stepped-current sweep table.
"""

from typing import Dict, Optional

import numpy as np

from src.motor_calc.config import MotorCalcConfig, DEFAULT_CONFIG
from src.motor_calc.core import AnalysisResult
from src.motor_calc.models import OperatingPoint
from src.motor_calc.validation import ClampedWarning


RESET = "\x1b[0m"
RED = "\x1b[31m"
BOLD_CYAN = "\x1b[1;36m"
BOLD_YELLOW = "\x1b[1;33m"
CYAN = "\x1b[36m"
YELLOW = "\x1b[33m"


def _value(value: float, unit: str, label: str, precision: int) -> str:
    return f"{BOLD_CYAN}{value:.{precision}f}{unit}{RESET}{label}\n"


def format_operating_point(
    title: str,
    point: OperatingPoint,
    config: Optional[MotorCalcConfig] = None
) -> str:
    """
    Format one operating point as a titled block.

    Example output (colors omitted)::

        At maximum output power:
        20.00 A current
        9100.00 RPM
        ...
    """
    if config is None:
        config = DEFAULT_CONFIG
    p = config.display_precision

    return (
        f"{title}:\n"
        + _value(point.current, " A", " current", p)
        + _value(point.speed, " RPM", "", p)
        + _value(point.torque_ncm, " Ncm", " torque", p)
        + _value(point.power_in, " W", f" in ({point.power_in_hp:.{p}f} HP)", p)
        + _value(point.power_out, " W", f" out ({point.power_out_hp:.{p}f} HP)", p)
        + _value(point.efficiency, "%", " efficiency", p)
    )


def format_analysis(
    result: AnalysisResult,
    config: Optional[MotorCalcConfig] = None
) -> str:
    """Both result blocks, power first."""
    return (
        "\n\n"
        + format_operating_point("At maximum output power", result.max_power, config)
        + "\n\n"
        + format_operating_point("At maximum efficiency", result.max_efficiency, config)
        + "\n\n"
    )


def format_error(message: str) -> str:
    return f"\n\n{RED}Error: {message}{RESET}\n\n\n"


def format_clamp_warning(
    warning: ClampedWarning,
    config: Optional[MotorCalcConfig] = None
) -> str:
    if config is None:
        config = DEFAULT_CONFIG
    p = config.display_precision

    return (
        f"\n\n{BOLD_YELLOW}Warning: {warning.message}\n"
        f"Maximum current has been reduced to {CYAN}{warning.new_max_current:.{p}f} A"
        f"{YELLOW}.{RESET}\n"
    )


def format_sweep_table(
    sweep: Dict[str, np.ndarray],
    config: Optional[MotorCalcConfig] = None
) -> str:
    """
    Format a current sweep as fixed-width columns.

    Parameters:
    ----------
    sweep : dict
        Arrays as returned by ``MotorCalculator.sweep``.

    config : MotorCalcConfig, optional
        Display precision.
    """
    if config is None:
        config = DEFAULT_CONFIG
    p = config.display_precision

    header = (
        f"{'Current (A)':>12} {'RPM':>10} {'Torque (Ncm)':>13} "
        f"{'In (W)':>10} {'Out (W)':>10} {'Eff (%)':>8}"
    )
    lines = ["Performance across the current range:", header, "-" * len(header)]

    for current, speed, torque, power_in, power_out, efficiency in zip(
        sweep["current"], sweep["speed"], sweep["torque"],
        sweep["power_in"], sweep["power_out"], sweep["efficiency"]
    ):
        lines.append(
            f"{current:>12.{p}f} {speed:>10.{p}f} {torque * 100:>13.{p}f} "
            f"{power_in:>10.{p}f} {power_out:>10.{p}f} {efficiency:>8.{p}f}"
        )

    return "\n".join(lines) + "\n\n"
