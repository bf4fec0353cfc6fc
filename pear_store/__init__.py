"""PEAR phone store: cart pricing, checkout and order tracking service"""

__version__ = "1.0.0"
