"""
Candidate Assessment Platform — scoring engine and service surface.
"""

__version__ = "1.0.0"
