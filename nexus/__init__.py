"""Nexus Supervision - supervision request lifecycle and capacity admission"""

__version__ = "1.0.0"
