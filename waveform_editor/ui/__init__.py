"""Tkinter and matplotlib user interface."""
