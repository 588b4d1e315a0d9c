"""
External service clients
"""

from planb_relay.services.planb_client import PlanBClient

__all__ = ["PlanBClient"]
