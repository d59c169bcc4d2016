"""Dining order management for Bone's restaurants.

Guests build personal orders from a restaurant's menu cards, personal orders
roll up into a table order and staff follow the table order from the kitchen
board until it is closed.
"""

__version__ = "0.4.0"
