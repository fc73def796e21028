"""SustainaReview: sustainable product reviews.

This package contains the REST API (catalog, reviews, bookmarks, accounts),
its persistence layer, an operator CLI, and a Python client with a state store
for building frontends against the API.
"""

__version__ = "0.1.0"
