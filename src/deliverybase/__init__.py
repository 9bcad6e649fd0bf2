"""DeliveryBase - Order delivery back-end.

Customer accounts, role-based permissions, addresses, orders with a delivery
lifecycle, and route generation for couriers.
"""

__version__ = "0.1.0"

from deliverybase.infrastructure.api.app import app

__all__ = ["app", "__version__"]
