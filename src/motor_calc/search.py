"""
Peak Search
===========

Finds the current that maximizes output power or efficiency within the
validated range [I0 + 1e-4, I_max].

Strategies:
-----------
- ITERATIVE (reference): derivative-free coarse-to-fine grid refinement.
  Each pass samples the window every ``step``, recenters on the best
  sample to [best - step, best + step] and divides ``step`` by 10.
  Assumes the objective is unimodal over the range.
- CLOSED_FORM: analytic optimum of the linear droop model.
      P_out ∝ (I - I0)(Isc - I)        → I* = (I0 + Isc) / 2
      η     ∝ (I - I0)(Isc - I) / I    → I* = sqrt(I0 × Isc)
  where Isc = V / Rm. Only valid while the model stays linear.
- BOUNDED_SCALAR: scipy.optimize.minimize_scalar (bounded Brent) on the
  negated objective, checked against both range endpoints.

All strategies clamp to the range, so an optimum beyond it resolves to
the nearest boundary.
"""

import math
from typing import Callable, Iterator, Optional, Tuple, Union

from scipy import optimize

from .config import MotorCalcConfig, DEFAULT_CONFIG
from .debugger import CalculationDebugger
from .models import MotorParameters, Objective, SearchStrategy
from .physics import evaluate


def search_range(
    params: MotorParameters,
    config: Optional[MotorCalcConfig] = None
) -> Tuple[float, float]:
    """Return the (hard_min_current, max_current) interval searched."""
    if config is None:
        config = DEFAULT_CONFIG
    return config.hard_min_current(params.no_load_current), params.max_current


def _objective_function(
    params: MotorParameters,
    objective: Objective,
    config: MotorCalcConfig
) -> Callable[[float], float]:
    def value_at(current: float) -> float:
        return evaluate(params, current, config).value_for(objective)
    return value_at


def _sample_currents(lo: float, hi: float, step: float) -> Iterator[float]:
    """
    Yield lo, lo + step, ... up to hi.

    When an increment overshoots hi, hi itself is yielded so the boundary
    is always evaluated.
    """
    current = lo
    while current <= hi:
        yield current

        next_current = current + step
        if next_current <= current:
            # Step lost to rounding
            if current < hi:
                yield hi
            return

        if next_current > hi and current < hi:
            next_current = hi
        current = next_current


def _iterative_peak(
    params: MotorParameters,
    objective: Objective,
    config: MotorCalcConfig,
    debugger: Optional[CalculationDebugger]
) -> float:
    value_at = _objective_function(params, objective, config)
    hard_min, upper = search_range(params, config)

    lo, hi = hard_min, upper
    step = (hi - lo) / config.search_subdivisions
    best = -math.inf
    best_current = hard_min

    for iteration in range(1, config.search_max_iterations + 1):
        improved = False
        samples = 0

        for current in _sample_currents(lo, hi, step):
            samples += 1
            value = value_at(current)
            # Strictly greater: ties keep the lower current
            if value > best:
                improved = True
                best = value
                best_current = current

        if debugger is not None:
            debugger.add_search_iteration(
                iteration, (lo, hi), step, samples, best_current, best, improved
            )

        if not improved:
            break

        lo = max(best_current - step, hard_min)
        hi = min(best_current + step, upper)
        step /= config.search_subdivisions

        if max(hi - best_current, best_current - lo) < config.search_tolerance:
            break
        if step <= 0:
            break
    else:
        print(f"Warning: Peak search did not converge after "
              f"{config.search_max_iterations} iterations")

    return best_current


def _closed_form_peak(
    params: MotorParameters,
    objective: Objective,
    config: MotorCalcConfig,
    debugger: Optional[CalculationDebugger]
) -> float:
    hard_min, upper = search_range(params, config)
    i0 = params.no_load_current
    isc = params.short_circuit_current

    if objective is Objective.POWER:
        target = (i0 + isc) / 2
        formula = "I* = (I0 + Isc) / 2"
    else:
        # η falls monotonically with current when I0 = 0
        target = math.sqrt(i0 * isc) if i0 > 0 else 0.0
        formula = "I* = sqrt(I0 × Isc)"

    peak = min(max(target, hard_min), upper)

    if debugger is not None:
        debugger.add_step(
            category="Search",
            description=f"Closed-form {objective.label} optimum",
            formula=formula,
            variables={"I0": i0, "Isc": isc, "lo": hard_min, "hi": upper},
            result=peak,
            result_name="best_current",
            result_unit="A",
            comment="" if peak == target else f"analytic optimum {target:.6g} A clamped to range"
        )

    return peak


def _bounded_scalar_peak(
    params: MotorParameters,
    objective: Objective,
    config: MotorCalcConfig,
    debugger: Optional[CalculationDebugger]
) -> float:
    value_at = _objective_function(params, objective, config)
    hard_min, upper = search_range(params, config)

    result = optimize.minimize_scalar(
        lambda current: -value_at(current),
        bounds=(hard_min, upper),
        method="bounded",
        options={"xatol": config.search_tolerance}
    )

    # Bounded Brent never lands exactly on an endpoint, so compare them too
    best_current = hard_min
    best = -math.inf
    for current in sorted((hard_min, float(result.x), upper)):
        value = value_at(current)
        if value > best:
            best = value
            best_current = current

    if debugger is not None:
        debugger.add_step(
            category="Search",
            description=f"Bounded scalar {objective.label} optimum",
            formula="minimize -f(I) on [lo, hi], compare with endpoints",
            variables={"lo": hard_min, "hi": upper, "x_brent": float(result.x),
                       "evaluations": int(result.nfev)},
            result=best_current,
            result_name="best_current",
            result_unit="A"
        )

    return best_current


_STRATEGIES = {
    SearchStrategy.ITERATIVE: _iterative_peak,
    SearchStrategy.CLOSED_FORM: _closed_form_peak,
    SearchStrategy.BOUNDED_SCALAR: _bounded_scalar_peak,
}


def find_peak(
    params: MotorParameters,
    objective: Objective,
    strategy: Union[SearchStrategy, str] = SearchStrategy.ITERATIVE,
    config: Optional[MotorCalcConfig] = None,
    debugger: Optional[CalculationDebugger] = None
) -> float:
    """
    Find the current that maximizes the selected objective.

    Expects parameters that already passed :func:`validate_and_clamp`;
    there are no error outcomes for validated input.

    Parameters:
    ----------
    params : MotorParameters
        Validated motor parameters.

    objective : Objective
        POWER or EFFICIENCY.

    strategy : SearchStrategy or str
        Search implementation. ITERATIVE is the reference algorithm.

    config : MotorCalcConfig, optional
        Model constants and search settings.

    debugger : CalculationDebugger, optional
        Receives one step per refinement pass when given.

    Returns:
    -------
    float
        Current (A) within [no_load_current + 1e-4, max_current].

    Example:
    -------
        current = find_peak(params, Objective.EFFICIENCY)
        point = evaluate(params, current)
    """
    if config is None:
        config = DEFAULT_CONFIG

    strategy = SearchStrategy(strategy)

    if debugger is not None:
        debugger.start_section(f"Maximize {objective.label} ({strategy.value})")

    return _STRATEGIES[strategy](params, objective, config, debugger)
