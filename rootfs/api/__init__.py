"""
The **api** Django app serves the route store: a small HTTP front for the
HTTPRoute objects the gateway reconciles.
"""

__version__ = '1.0.0'
