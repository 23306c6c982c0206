"""
                Reddy's Kitchen Storefront

A food-ordering storefront: a FastAPI backend serving the restaurant
catalog and the order store, plus the client-side cart, catalog view,
checkout and order view that talk to it.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
