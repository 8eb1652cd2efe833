#!/usr/bin/env python3
"""
MotorCalc Launcher
==================

This script launches the MotorCalc terminal interface. When started
without a terminal it reopens itself in a terminal emulator.

Usage:
------
    python run_motor_calc.py
    python run_motor_calc.py --trace    # print the calculation trace

Requirements:
------------
- Python 3.8+
- numpy, scipy
- A POSIX terminal (termios) for single-key input
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))


def main():
    """Launch the MotorCalc terminal UI."""
    from src.ui.bootstrap import TERMINAL_MARKER, is_interactive

    # Only show the banner where someone can read it
    show_banner = is_interactive() or TERMINAL_MARKER in sys.argv
    if show_banner:
        print("=" * 60)
        print("  MotorCalc - Brushed Motor Peak Power & Efficiency")
        print("=" * 60)
        print()

    # Check dependencies
    try:
        import numpy
        import scipy
    except ImportError as e:
        print(f"\n[ERROR] Missing dependency: {e}")
        print("\nInstall with: pip install -e .")
        sys.exit(1)

    if show_banner:
        print(f"[OK] numpy {numpy.__version__}")
        print(f"[OK] scipy {scipy.__version__}")
        print()

    try:
        from src.ui.motor_calc_cli import main as run_cli
        sys.exit(run_cli(sys.argv))
    except Exception as e:
        print(f"\n[ERROR] MotorCalc stopped: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
