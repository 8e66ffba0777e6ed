"""
Domain interfaces (ports) for the ID card feature.

Following clean architecture principles:
- Domain defines interfaces (ports)
- Infrastructure implements interfaces (adapters)
- Application orchestrates via interfaces
"""

from .iocr_engine import IOcrEngine

__all__ = ["IOcrEngine"]
