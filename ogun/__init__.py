"""Additive wavetable synthesis voice built from curve-shaped harmonic spectra."""

__version__ = "0.0.1"

__all__ = ["audiofft", "curve", "listeners", "note", "ooura", "processor", "quad_osc"]