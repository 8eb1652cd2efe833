"""
MotorCalc Module
================

Brushed DC motor performance model and peak search.

Given five nameplate parameters (Kv, supply voltage, no-load current,
maximum current, armature resistance) the module finds the operating
current that maximizes output power and the one that maximizes
efficiency.

Key Classes:
------------
- MotorCalculator: Validation + peak search + evaluation in one call
- MotorParameters: Motor nameplate parameters
- OperatingPoint: Motor state at a given current
- CalculationDebugger: Step-by-step trace of a calculation

Key Functions:
--------------
- evaluate(): Motor state at a given current
- validate_and_clamp(): Check and repair the usable current range
- find_peak(): Current maximizing power or efficiency

Example Usage:
-------------
    from src.motor_calc import MotorCalculator, MotorParameters

    calculator = MotorCalculator()
    result = calculator.analyze(MotorParameters(
        kv=1000,
        voltage=11.1,
        no_load_current=0.5,
        max_current=20,
        armature_resistance=100,   # mΩ
    ))
    print(f"Max efficiency {result.max_efficiency.efficiency:.1f}% "
          f"at {result.max_efficiency.current:.2f} A")

Units Convention:
----------------
- Voltage: Volts (V)
- Current: Amperes (A)
- Resistance: milliohms (mΩ) on input
- Torque: Newton-meters (Nm)
- Speed: revolutions per minute (RPM)
- Power: Watts (W)
- Efficiency: percent (%)
"""

from .config import MotorCalcConfig, DEFAULT_CONFIG
from .core import AnalysisResult, MotorCalculator
from .debugger import CalculationDebugger
from .models import MotorParameters, Objective, OperatingPoint, SearchStrategy
from .physics import evaluate, evaluate_array
from .search import find_peak, search_range
from .validation import (
    ClampedWarning,
    InvalidParameterError,
    MotorValidationError,
    OpenCircuitAtNoLoadError,
    TooNarrowRangeError,
    validate_and_clamp,
)

__all__ = [
    "MotorCalcConfig",
    "DEFAULT_CONFIG",
    "MotorCalculator",
    "AnalysisResult",
    "CalculationDebugger",
    "MotorParameters",
    "OperatingPoint",
    "Objective",
    "SearchStrategy",
    "evaluate",
    "evaluate_array",
    "find_peak",
    "search_range",
    "validate_and_clamp",
    "ClampedWarning",
    "MotorValidationError",
    "InvalidParameterError",
    "TooNarrowRangeError",
    "OpenCircuitAtNoLoadError",
]
