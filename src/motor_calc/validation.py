"""
Range Validation & Clamping
===========================

Checks that a motor's usable current range is meaningful before any peak
search runs, and repairs a maximum current that lies past the point where
the resistive drop would exceed the supply voltage.

Checks, in order:
- Max current must exceed no-load current by at least 0.01 A
- Just above no-load current, I × Rm must not exceed V_supply
- If I_max × Rm >= V_supply, I_max is clamped to V_supply / Rm (+1e-4)
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import MotorCalcConfig, DEFAULT_CONFIG
from .models import MotorParameters


class MotorValidationError(ValueError):
    """Base class for motor parameters that cannot be analyzed."""


class InvalidParameterError(MotorValidationError):
    """A parameter is outside its allowed sign/zero domain."""


class TooNarrowRangeError(MotorValidationError):
    """Max current is less than, equal to, or too close to no-load current."""

    def __init__(self, no_load_current: float, max_current: float):
        self.no_load_current = no_load_current
        self.max_current = max_current
        super().__init__(
            "Maximum current is less than, equal to, or very close to "
            "unloaded current."
        )


class OpenCircuitAtNoLoadError(MotorValidationError):
    """The resistive drop exceeds the supply already near no-load current."""

    def __init__(self, voltage_drop: float, voltage: float):
        self.voltage_drop = voltage_drop
        self.voltage = voltage
        super().__init__(
            "At minimum current or barely above, the motor would be an "
            "open circuit (Vdrop > Vin)."
        )


@dataclass(frozen=True)
class ClampedWarning:
    """
    Non-fatal notice that the maximum current was reduced.

    Attributes:
    ----------
    original_max_current : float
        Max current as entered (A).

    new_max_current : float
        Max current after clamping to the open-circuit point (A).
    """
    original_max_current: float
    new_max_current: float

    @property
    def message(self) -> str:
        return (
            "At maximum current, the motor would be an open circuit "
            "(Vdrop > Vin)."
        )


def check_parameter_domains(params: MotorParameters):
    """
    Check every parameter against its sign constraint.

    Raises:
    ------
    InvalidParameterError
        If Kv, voltage or max current is not positive, or no-load current
        or armature resistance is negative.
    """
    positive = {
        "kv": params.kv,
        "voltage": params.voltage,
        "max_current": params.max_current,
    }
    non_negative = {
        "no_load_current": params.no_load_current,
        "armature_resistance": params.armature_resistance,
    }

    for name, value in positive.items():
        if not value > 0:
            raise InvalidParameterError(f"{name} must be positive, got {value}")

    for name, value in non_negative.items():
        if not value >= 0:
            raise InvalidParameterError(f"{name} must not be negative, got {value}")


def validate_and_clamp(
    params: MotorParameters,
    config: Optional[MotorCalcConfig] = None
) -> Tuple[MotorParameters, Optional[ClampedWarning]]:
    """
    Validate the usable current range and clamp max current if needed.

    Parameters:
    ----------
    params : MotorParameters
        Parameters as entered.

    config : MotorCalcConfig, optional
        Thresholds. Uses the default configuration if not specified.

    Returns:
    -------
    tuple
        (parameters to search with, ClampedWarning or None). The returned
        parameters are ``params`` itself when nothing was clamped.

    Raises:
    ------
    TooNarrowRangeError
        If max_current - no_load_current < 0.01 A.

    OpenCircuitAtNoLoadError
        If (no_load_current + 1e-4) × Rm exceeds the supply voltage.

    Example:
    -------
        params = MotorParameters(1000, 11.1, 0.5, 200, 100)
        params, warning = validate_and_clamp(params)
        # warning.new_max_current ≈ 111.0001
    """
    if config is None:
        config = DEFAULT_CONFIG

    if params.max_current - params.no_load_current < config.min_current_range:
        raise TooNarrowRangeError(params.no_load_current, params.max_current)

    min_current_drop = (
        config.hard_min_current(params.no_load_current)
        * params.armature_resistance / 1000
    )
    if min_current_drop > params.voltage:
        raise OpenCircuitAtNoLoadError(min_current_drop, params.voltage)

    if params.max_current * params.armature_resistance / 1000 >= params.voltage:
        new_max_current = (
            params.voltage / (params.armature_resistance / 1000)
            + config.clamp_current_offset
        )
        warning = ClampedWarning(
            original_max_current=params.max_current,
            new_max_current=new_max_current,
        )
        return replace(params, max_current=new_max_current), warning

    return params, None
