"""
Application Domain Services (interfaces)
"""

from .order_gateway import OrderGatewayProtocol

__all__ = ["OrderGatewayProtocol"]
