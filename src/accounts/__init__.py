"""User profile accounts data layer.

This package holds the account entities, their table models, the
validation boundary and the storage context that binds them to a database.
"""

__version__ = "0.1.0"
