"""
Application layer - service factories.

Wires infrastructure implementations into core services.
"""

from src.application.services import get_history_db_access, reset_services

__all__ = [
    "get_history_db_access",
    "reset_services",
]
