"""
Motor Model
===========

Steady-state performance of a brushed DC motor from its nameplate
parameters, using a linear voltage-droop model.

Theory Background:
-----------------
    V_supply ──── Rm ──── back-EMF

- Speed  = (V_supply - I × Rm) × Kv          (resistive droop)
- Torque = Kt × (I - I0) × 0.00706           (ozf·in → N·m)
- P_out  = Torque × Speed × 2π / 60          (RPM → rad/s)
- P_in   = V_supply × I
- η      = P_out / P_in × 100

Where Kt = 1352 / Kv and Rm is the armature resistance in Ohms.

Results are only physically meaningful between the no-load current and
the validated maximum current; outside that range torque or speed go
negative and efficiency can exceed 100%.
"""

import math
from typing import Dict, Optional

import numpy as np

from .config import MotorCalcConfig, DEFAULT_CONFIG
from .models import MotorParameters, OperatingPoint


def evaluate(
    params: MotorParameters,
    current: float,
    config: Optional[MotorCalcConfig] = None
) -> OperatingPoint:
    """
    Calculate the motor state at a given current.

    Pure and deterministic: identical inputs give bit-identical output.

    Parameters:
    ----------
    params : MotorParameters
        Motor nameplate parameters.

    current : float
        Motor current (A).

    config : MotorCalcConfig, optional
        Model constants. Uses the default configuration if not specified.

    Returns:
    -------
    OperatingPoint
        Speed, torque, powers and efficiency at ``current``.

    Example:
    -------
        params = MotorParameters(1000, 11.1, 0.5, 20, 100)
        point = evaluate(params, 10.0)
        print(f"{point.power_out:.1f} W at {point.efficiency:.1f}%")
    """
    if config is None:
        config = DEFAULT_CONFIG

    kt = config.kt_from_kv(params.kv)

    speed = (params.voltage - current * params.armature_resistance / 1000) * params.kv
    torque = kt * (current - params.no_load_current) * config.torque_unit_factor

    power_out = torque * speed * (2 * math.pi) / 60
    power_in = params.voltage * current

    if power_in != 0:
        efficiency = (power_out / power_in) * 100
    else:
        efficiency = 0.0

    return OperatingPoint(
        current=current,
        speed=speed,
        torque=torque,
        power_in=power_in,
        power_out=power_out,
        efficiency=efficiency,
    )


def evaluate_array(
    params: MotorParameters,
    currents,
    config: Optional[MotorCalcConfig] = None
) -> Dict[str, np.ndarray]:
    """
    Vectorized version of :func:`evaluate` over many currents.

    Parameters:
    ----------
    params : MotorParameters
        Motor nameplate parameters.

    currents : array_like
        Motor currents (A).

    config : MotorCalcConfig, optional
        Model constants.

    Returns:
    -------
    dict
        Arrays keyed by ``current``, ``speed``, ``torque``, ``power_in``,
        ``power_out`` and ``efficiency``, one entry per input current.
    """
    if config is None:
        config = DEFAULT_CONFIG

    currents = np.asarray(currents, dtype=float)
    kt = config.kt_from_kv(params.kv)

    speed = (params.voltage - currents * params.armature_resistance / 1000) * params.kv
    torque = kt * (currents - params.no_load_current) * config.torque_unit_factor

    power_out = torque * speed * (2 * math.pi) / 60
    power_in = params.voltage * currents

    efficiency = np.zeros_like(currents)
    nonzero = power_in != 0
    efficiency[nonzero] = (power_out[nonzero] / power_in[nonzero]) * 100

    return {
        "current": currents,
        "speed": speed,
        "torque": torque,
        "power_in": power_in,
        "power_out": power_out,
        "efficiency": efficiency,
    }
