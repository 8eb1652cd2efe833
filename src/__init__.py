"""
MotorCalc - Main Package
========================

Brushed DC motor calculator for hobbyists choosing motor, battery and
ESC combinations.

This package provides modules for:
- Motor calculation (motor_calc): Performance model and peak search
- Terminal UI (ui): Interactive prompts, results and restart loop
"""

__version__ = "0.1.0"
__author__ = "MotorCalc Team"
