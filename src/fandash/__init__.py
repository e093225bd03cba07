"""fandash - live fan and temperature dashboard for a fleet of small devices."""

__version__ = "0.1.0"
