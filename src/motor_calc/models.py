"""
MotorCalc Data Models
=====================

Defines the immutable value types shared by the motor model, the range
validation step and the peak search.

Classes:
--------
- MotorParameters: Nameplate parameters supplied once per session
- OperatingPoint: Motor state derived at a specific current
- Objective: Which OperatingPoint field the search maximizes
- SearchStrategy: Interchangeable peak search implementations
"""

import math
from dataclasses import dataclass
from enum import Enum


# Mechanical horsepower (W/HP)
WATTS_PER_HP = 745.69987158227

# Nominal LiPo cell voltage (V)
NOMINAL_CELL_VOLTAGE = 3.7


class Objective(Enum):
    """Quantity the peak search maximizes."""
    POWER = "power_out"          # Mechanical output power (W)
    EFFICIENCY = "efficiency"    # Output / input power (%)

    @property
    def label(self) -> str:
        """Human-readable name used in reports."""
        return "output power" if self is Objective.POWER else "efficiency"


class SearchStrategy(Enum):
    """Peak search implementations sharing the find_peak contract."""
    ITERATIVE = "iterative"              # Coarse-to-fine grid refinement
    CLOSED_FORM = "closed_form"          # Analytic optimum of the linear model
    BOUNDED_SCALAR = "bounded_scalar"    # scipy.optimize bounded minimizer


@dataclass(frozen=True)
class MotorParameters:
    """
    Nameplate parameters of a brushed DC motor and its supply.

    Instances are immutable. The range clamping step produces a new
    instance with a reduced ``max_current`` rather than editing in place.

    Attributes:
    ----------
    kv : float
        Speed constant (RPM/V at no load), > 0.

    voltage : float
        Supply voltage (V), > 0.

    no_load_current : float
        Current drawn at zero torque (A), >= 0.

    max_current : float
        Upper bound of the usable current range (A), > 0.

    armature_resistance : float
        Winding resistance in milliohms (mΩ), >= 0.
    """
    kv: float
    voltage: float
    no_load_current: float
    max_current: float
    armature_resistance: float

    @classmethod
    def from_cell_count(
        cls,
        kv: float,
        cell_count: int,
        no_load_current: float,
        max_current: float,
        armature_resistance: float,
        cell_voltage: float = NOMINAL_CELL_VOLTAGE
    ) -> "MotorParameters":
        """
        Build parameters with the supply voltage derived from a cell count.

        Example:
        -------
            params = MotorParameters.from_cell_count(1000, 3, 0.5, 20, 100)
            # params.voltage ≈ 11.1
        """
        return cls(
            kv=float(kv),
            voltage=cell_count * cell_voltage,
            no_load_current=float(no_load_current),
            max_current=float(max_current),
            armature_resistance=float(armature_resistance),
        )

    @property
    def short_circuit_current(self) -> float:
        """Current at zero speed, V / R (A). Infinite for zero resistance."""
        if self.armature_resistance == 0:
            return math.inf
        return 1000 * self.voltage / self.armature_resistance


@dataclass(frozen=True)
class OperatingPoint:
    """
    Motor state at a specific current.

    Attributes:
    ----------
    current : float
        Motor current (A).

    speed : float
        Shaft speed (RPM).

    torque : float
        Output torque (N·m).

    power_in : float
        Electrical input power (W).

    power_out : float
        Mechanical output power (W).

    efficiency : float
        power_out / power_in (%).
    """
    current: float
    speed: float
    torque: float
    power_in: float
    power_out: float
    efficiency: float

    @property
    def torque_ncm(self) -> float:
        """Output torque in N·cm."""
        return self.torque * 100

    @property
    def power_in_hp(self) -> float:
        """Electrical input power in mechanical horsepower."""
        return self.power_in / WATTS_PER_HP

    @property
    def power_out_hp(self) -> float:
        """Mechanical output power in horsepower."""
        return self.power_out / WATTS_PER_HP

    def value_for(self, objective: Objective) -> float:
        """Return the field selected by ``objective``."""
        return getattr(self, objective.value)
