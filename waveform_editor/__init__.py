"""Waveform Editor: select and export ranges of amplitude-pair samples."""

__version__ = "1.0.0"
