"""
MotorCalc Core Module
=====================

Ties the motor model, range validation and peak search together into a
single analysis run:

    validate_and_clamp → find_peak(POWER) → find_peak(EFFICIENCY)
                       → evaluate at both currents

Classes:
--------
- AnalysisResult: Outcome of one analysis run
- MotorCalculator: Main entry point holding the configuration
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np

from .config import MotorCalcConfig, DEFAULT_CONFIG
from .debugger import CalculationDebugger
from .models import MotorParameters, Objective, OperatingPoint, SearchStrategy
from .physics import evaluate, evaluate_array
from .search import find_peak, search_range
from .validation import ClampedWarning, check_parameter_domains, validate_and_clamp


@dataclass(frozen=True)
class AnalysisResult:
    """
    Result of analyzing one motor.

    Attributes:
    ----------
    params : MotorParameters
        Parameters the search ran on (after clamping).

    max_power : OperatingPoint
        State at the current maximizing output power.

    max_efficiency : OperatingPoint
        State at the current maximizing efficiency.

    warning : ClampedWarning or None
        Set when max current was reduced during validation.

    strategy : SearchStrategy
        Search implementation used.
    """
    params: MotorParameters
    max_power: OperatingPoint
    max_efficiency: OperatingPoint
    warning: Optional[ClampedWarning]
    strategy: SearchStrategy

    @property
    def was_clamped(self) -> bool:
        return self.warning is not None


class MotorCalculator:
    """
    Brushed DC motor peak-performance calculator.

    Attributes:
    ----------
    config : MotorCalcConfig
        Model constants, thresholds and search settings.

    Example:
    -------
        calculator = MotorCalculator()
        params = MotorParameters(kv=1000, voltage=11.1, no_load_current=0.5,
                                 max_current=20, armature_resistance=100)
        result = calculator.analyze(params)
        print(f"Peak power {result.max_power.power_out:.1f} W "
              f"at {result.max_power.current:.2f} A")
    """

    def __init__(self, config: Optional[MotorCalcConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    # =========================================================================
    # Building Blocks
    # =========================================================================

    def validate(self, params: MotorParameters):
        """
        Check domains, then validate and clamp the current range.

        Returns:
        -------
        tuple
            (MotorParameters, ClampedWarning or None)

        Raises:
        ------
        MotorValidationError
            InvalidParameterError, TooNarrowRangeError or
            OpenCircuitAtNoLoadError.
        """
        check_parameter_domains(params)
        return validate_and_clamp(params, self.config)

    def evaluate(self, params: MotorParameters, current: float) -> OperatingPoint:
        """Motor state at ``current``."""
        return evaluate(params, current, self.config)

    def find_peak(
        self,
        params: MotorParameters,
        objective: Objective,
        strategy: Union[SearchStrategy, str, None] = None,
        debugger: Optional[CalculationDebugger] = None
    ) -> float:
        """
        Current maximizing ``objective``; ``None`` strategy uses the config default.
        """
        if strategy is None:
            strategy = self.config.search_strategy
        return find_peak(params, objective, strategy, self.config, debugger)

    # =========================================================================
    # Full Analysis
    # =========================================================================

    def analyze(
        self,
        params: MotorParameters,
        strategy: Union[SearchStrategy, str, None] = None,
        debugger: Optional[CalculationDebugger] = None
    ) -> AnalysisResult:
        """
        Validate ``params`` and locate both the power and efficiency peaks.

        Parameters:
        ----------
        params : MotorParameters
            Parameters as entered.

        strategy : SearchStrategy or str, optional
            Overrides ``config.search_strategy``.

        debugger : CalculationDebugger, optional
            Records inputs, validation and every search step.

        Returns:
        -------
        AnalysisResult

        Raises:
        ------
        MotorValidationError
            If the parameters cannot be analyzed.
        """
        if strategy is None:
            strategy = self.config.search_strategy
        strategy = SearchStrategy(strategy)

        if debugger is not None:
            debugger.start_section("INPUT PARAMETERS")
            debugger.add_input("Kv", params.kv, "RPM/V")
            debugger.add_input("V_supply", params.voltage, "V")
            debugger.add_input("I0", params.no_load_current, "A")
            debugger.add_input("I_max", params.max_current, "A")
            debugger.add_input("Rm", params.armature_resistance, "mΩ")

        validated, warning = self.validate(params)

        if debugger is not None:
            debugger.start_section("VALIDATION")
            debugger.add_step(
                category="Validation",
                description="Usable current range",
                formula="[I0 + 1e-4, I_max], I_max clamped to V / Rm",
                variables={"I0": validated.no_load_current,
                           "I_max_entered": params.max_current},
                result=validated.max_current,
                result_name="I_max",
                result_unit="A",
                comment="clamped to open-circuit current" if warning else ""
            )

        power_current = self.find_peak(validated, Objective.POWER, strategy, debugger)
        efficiency_current = self.find_peak(
            validated, Objective.EFFICIENCY, strategy, debugger
        )

        return AnalysisResult(
            params=validated,
            max_power=self.evaluate(validated, power_current),
            max_efficiency=self.evaluate(validated, efficiency_current),
            warning=warning,
            strategy=strategy,
        )

    def sweep(
        self,
        params: MotorParameters,
        num_points: Optional[int] = None
    ) -> Dict[str, np.ndarray]:
        """
        Performance at evenly stepped currents across the search range.

        Parameters:
        ----------
        params : MotorParameters
            Validated motor parameters.

        num_points : int, optional
            Number of currents. Uses ``config.sweep_points`` if not specified.

        Returns:
        -------
        dict
            Arrays as returned by :func:`evaluate_array`.
        """
        if num_points is None:
            num_points = self.config.sweep_points

        lo, hi = search_range(params, self.config)
        currents = np.linspace(lo, hi, num_points)

        return evaluate_array(params, currents, self.config)
