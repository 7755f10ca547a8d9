# statusbot/__init__.py
"""
Airport Status Bot

Turns the FAA NAS status feed into posts about ground stops, ground
delays, closures, arrival/departure delays and en route delays.
"""

from .settings import VERSION

__version__ = VERSION
