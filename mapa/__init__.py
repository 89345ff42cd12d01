"""
MAPA reporting service: ambulatory blood-pressure monitoring reports.
"""
__version__ = "1.0.0"
