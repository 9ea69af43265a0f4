"""Synthetic signal sources."""
from .signal_generator import SignalGenerator, SignalType
