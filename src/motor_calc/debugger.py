"""
Calculation Debugger
====================

Records validation and peak search steps so a result can be checked by
hand. Each search refinement pass becomes one step showing the window,
the sampling step and the best current found so far.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional


@dataclass
class CalculationStep:
    """A single recorded step with inputs, formula and result."""
    category: str           # e.g. "Input", "Validation", "Search"
    description: str
    formula: str
    variables: dict
    result: Any
    result_name: str
    result_unit: str = ""
    comment: str = ""


class CalculationDebugger:
    """
    Traces and records calculation steps.

    Usage:
        debugger = CalculationDebugger()
        debugger.start(motor="1000Kv @ 11.1V")
        find_peak(params, Objective.POWER, debugger=debugger)
        debugger.finish()
        print(debugger.get_report())
    """

    def __init__(self):
        self.steps: List[CalculationStep] = []
        self.sections: List[tuple] = []  # (index, section_name)
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.metadata: dict = {}

    def clear(self):
        """Clear all recorded steps."""
        self.steps = []
        self.sections = []
        self.start_time = None
        self.end_time = None
        self.metadata = {}

    def start(self, **metadata):
        """Start a new session, discarding earlier steps."""
        self.clear()
        self.start_time = datetime.now()
        self.metadata = metadata

    def finish(self):
        self.end_time = datetime.now()

    def start_section(self, name: str):
        """Begin a named group of steps."""
        self.sections.append((len(self.steps), name))

    def add_step(
        self,
        category: str,
        description: str,
        formula: str,
        variables: dict,
        result: Any,
        result_name: str,
        result_unit: str = "",
        comment: str = ""
    ):
        """Add a calculation step."""
        self.steps.append(CalculationStep(
            category=category,
            description=description,
            formula=formula,
            variables=variables,
            result=result,
            result_name=result_name,
            result_unit=result_unit,
            comment=comment
        ))

    def add_input(self, name: str, value: Any, unit: str = ""):
        """Record an input parameter."""
        self.add_step(
            category="Input",
            description=f"Input parameter: {name}",
            formula="",
            variables={},
            result=value,
            result_name=name,
            result_unit=unit
        )

    def add_search_iteration(
        self,
        iteration: int,
        window: tuple,
        step: float,
        samples: int,
        best_current: float,
        best_value: float,
        improved: bool
    ):
        """Record one refinement pass of the iterative peak search."""
        self.add_step(
            category="Search",
            description=f"Refinement pass {iteration}",
            formula="sample [lo, hi] every step, keep strictly greatest",
            variables={
                "lo": window[0],
                "hi": window[1],
                "step": step,
                "samples": samples,
                "best_value": best_value,
            },
            result=best_current,
            result_name="best_current",
            result_unit="A",
            comment="" if improved else "no improvement, stopping"
        )

    def get_report(self, include_sections: bool = True) -> str:
        """
        Generate a formatted text report of all recorded steps.

        Parameters:
        ----------
        include_sections : bool
            Include section headers in the report.

        Returns:
        -------
        str
            Formatted calculation trace.
        """
        lines = []

        lines.append("=" * 70)
        lines.append("MOTORCALC CALCULATION TRACE")
        lines.append("=" * 70)

        if self.start_time:
            lines.append(f"Generated: {self.start_time.strftime('%Y-%m-%d %H:%M:%S')}")

        if self.metadata:
            lines.append("")
            lines.append("Motor:")
            for key, value in self.metadata.items():
                lines.append(f"  {key}: {value}")

        lines.append("")

        section_indices = {idx: name for idx, name in self.sections}

        for step_num, step in enumerate(self.steps, start=1):
            if include_sections and (step_num - 1) in section_indices:
                lines.append("")
                lines.append(f">>> {section_indices[step_num - 1]}")
                lines.append("-" * 70)

            lines.append(f"[{step_num}] {step.description}")

            if step.variables:
                var_strs = []
                for name, value in step.variables.items():
                    if isinstance(value, float):
                        var_strs.append(f"{name}={value:.6g}")
                    else:
                        var_strs.append(f"{name}={value}")
                lines.append(f"    Inputs: {', '.join(var_strs)}")

            if step.formula:
                lines.append(f"    Formula: {step.formula}")

            result = f"{step.result:.6g}" if isinstance(step.result, float) else f"{step.result}"
            unit = f" {step.result_unit}" if step.result_unit else ""
            lines.append(f"    => {step.result_name} = {result}{unit}")

            if step.comment:
                lines.append(f"    // {step.comment}")

        lines.append("")
        lines.append("=" * 70)
        lines.append(f"Total Steps: {len(self.steps)}")
        if self.start_time and self.end_time:
            elapsed = (self.end_time - self.start_time).total_seconds()
            lines.append(f"Elapsed Time: {elapsed:.3f} seconds")
        lines.append("=" * 70)

        return "\n".join(lines)

    def find_steps_by_category(self, category: str) -> List[CalculationStep]:
        """Find all steps in a given category."""
        return [s for s in self.steps if s.category == category]

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Find the most recent step that produced a specific result."""
        for step in reversed(self.steps):
            if step.result_name == result_name:
                return step
        return None
