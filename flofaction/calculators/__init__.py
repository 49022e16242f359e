"""
Deterministic calculation core.

Pure Python math, no I/O, no shared state.
Each module exposes a pure function plus a form-driven BaseCalculator.
"""
