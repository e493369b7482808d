"""
Refix content store.

Persistence layer for the repair-guide site: users, tutorials, the device
catalog, products and feedback, stored in a document database or a local
JSON file.
"""

__version__ = "0.4.0"
