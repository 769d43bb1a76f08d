"""Pytest configuration and shared fixtures."""

import os

import matplotlib

# Tests draw on off-screen figures only; never open a window
os.environ.setdefault("MPLBACKEND", "Agg")
matplotlib.use("Agg")
