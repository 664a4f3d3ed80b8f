"""InternHub - internship placement lifecycle engine"""

__version__ = "1.0.0"
