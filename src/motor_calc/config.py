"""
MotorCalc Configuration Module
==============================

This module contains configuration settings and physical constants
for MotorCalc. Model constants, validation thresholds, search settings
and display settings are centralized here for easy modification.

Configuration Classes:
---------------------
- MotorCalcConfig: Main configuration class with all settings

Physical Constants:
------------------
- KT_FROM_KV_FACTOR: Empirical factor, Kt = 1352 / Kv (ozf·in per A)
- OZF_IN_TO_NM: Torque unit conversion, ozf·in to N·m

Usage:
------
    from src.motor_calc.config import MotorCalcConfig

    config = MotorCalcConfig(search_strategy="closed_form")
    print(config.hard_min_current(0.5))
"""

from dataclasses import dataclass
from typing import Union

from .models import NOMINAL_CELL_VOLTAGE, SearchStrategy


# =============================================================================
# Physical Constants
# =============================================================================

# Empirical conversion from speed constant to torque constant
# Kt [ozf·in/A] = 1352 / Kv [RPM/V]
KT_FROM_KV_FACTOR = 1352.0

# Torque unit conversion: 1 ozf·in = 0.00706 N·m
OZF_IN_TO_NM = 0.00706


# =============================================================================
# Validation and Search Defaults
# =============================================================================

# Offset above no-load current where the search starts (A)
# Avoids zero/very low torque at the boundary
MIN_CURRENT_OFFSET = 1e-4

# Narrowest usable current range (A)
MIN_CURRENT_RANGE = 0.01

# Added to the open-circuit current when max current gets clamped (A)
CLAMP_CURRENT_OFFSET = 1e-4

# Samples per search window span (window is split into this many steps)
DEFAULT_SEARCH_SUBDIVISIONS = 10

# Search convergence, accurate to 4 decimal places (A)
DEFAULT_SEARCH_TOLERANCE = 1e-4

# Hard cap on refinement passes
DEFAULT_SEARCH_MAX_ITERATIONS = 50


@dataclass
class MotorCalcConfig:
    """
    Configuration settings for MotorCalc.

    This class centralizes all configuration parameters including the
    motor model constants, validation thresholds, peak search settings
    and terminal display settings.

    Attributes:
    ----------
    kt_from_kv_factor : float
        Numerator of the Kt = factor / Kv relationship.

    torque_unit_factor : float
        Converts the intermediate torque unit (ozf·in) into N·m.

    min_current_offset : float
        Distance above no-load current where the search range begins (A).

    min_current_range : float
        Smallest accepted gap between max and no-load current (A).

    clamp_current_offset : float
        Offset added to the open-circuit current when clamping (A).

    search_subdivisions : int
        Number of steps each search window is split into.

    search_tolerance : float
        Window half-width at which the search has converged (A).

    search_max_iterations : int
        Maximum refinement passes before the search gives up.

    search_strategy : SearchStrategy or str
        Default peak search strategy.

    nominal_cell_voltage : float
        Volts per cell for cell-count voltage entry.

    display_precision : int
        Decimal places in terminal output.

    sweep_points : int
        Rows in the stepped-current sweep table.

    show_sweep_table : bool
        Whether the terminal UI prints the sweep table.

    terminal_title : str
        Window title used when launching a terminal emulator.

    Example:
    -------
        config = MotorCalcConfig()
        print(config.kt_from_kv(1000))  # 1.352 ozf·in/A
    """

    # -------------------------------------------------------------------------
    # Motor Model Constants
    # -------------------------------------------------------------------------

    kt_from_kv_factor: float = KT_FROM_KV_FACTOR
    torque_unit_factor: float = OZF_IN_TO_NM

    # -------------------------------------------------------------------------
    # Validation Thresholds
    # -------------------------------------------------------------------------

    min_current_offset: float = MIN_CURRENT_OFFSET
    min_current_range: float = MIN_CURRENT_RANGE
    clamp_current_offset: float = CLAMP_CURRENT_OFFSET

    # -------------------------------------------------------------------------
    # Search Configuration
    # -------------------------------------------------------------------------

    search_subdivisions: int = DEFAULT_SEARCH_SUBDIVISIONS
    search_tolerance: float = DEFAULT_SEARCH_TOLERANCE
    search_max_iterations: int = DEFAULT_SEARCH_MAX_ITERATIONS
    search_strategy: Union[SearchStrategy, str] = SearchStrategy.ITERATIVE

    # -------------------------------------------------------------------------
    # Input and Display
    # -------------------------------------------------------------------------

    nominal_cell_voltage: float = NOMINAL_CELL_VOLTAGE
    display_precision: int = 2
    sweep_points: int = 10
    show_sweep_table: bool = True
    terminal_title: str = "MotorCalc"

    def __post_init__(self):
        """
        Normalize the strategy and reject unusable search settings.

        Raises:
        ------
        ValueError
            If a search setting is not positive or the strategy is unknown.
        """
        if isinstance(self.search_strategy, str):
            self.search_strategy = SearchStrategy(self.search_strategy)

        if self.search_subdivisions < 1:
            raise ValueError("search_subdivisions must be at least 1")
        if self.search_tolerance <= 0:
            raise ValueError("search_tolerance must be positive")
        if self.search_max_iterations < 1:
            raise ValueError("search_max_iterations must be at least 1")
        if self.sweep_points < 2:
            raise ValueError("sweep_points must be at least 2")

    # -------------------------------------------------------------------------
    # Calculation Helpers
    # -------------------------------------------------------------------------

    def kt_from_kv(self, kv: float) -> float:
        """
        Calculate the torque constant (Kt) from the speed constant (Kv).

        Parameters:
        ----------
        kv : float
            Motor speed constant in RPM/V.

        Returns:
        -------
        float
            Torque constant in ozf·in/A. Multiply torque by
            ``torque_unit_factor`` to get N·m.
        """
        return self.kt_from_kv_factor / kv

    def hard_min_current(self, no_load_current: float) -> float:
        """Lowest current the search will consider (A)."""
        return no_load_current + self.min_current_offset


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = MotorCalcConfig()
