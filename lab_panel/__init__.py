"""LMS equalization control panel.

Tune the experiment parameters, generate the Octave script, and run the
simulation on the remote execution service.
"""
