"""Development helpers: opt-in timing instrumentation and the Matplotlib plotter.

:mod:`plotter` needs the optional ``plot`` extra (Matplotlib); nothing else in
the package imports it, so the core runs without a plotting backend.
"""
