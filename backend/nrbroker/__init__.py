"""New Relic configuration broker client"""

__version__ = "1.0.0"
