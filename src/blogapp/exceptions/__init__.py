
# blogapp/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository-level errors (RepositoryError, NotFoundError, ...)
# │   ├── mapper.py                  # Map SQLAlchemy errors to repository-level errors
# │   └── store.py                   # Store lifecycle errors (StoreConfigError, StoreConnectionError)

from .base import RepositoryError, NotFoundError, InvalidFieldError
from .store import StoreError, StoreConfigError, StoreConnectionError

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidFieldError",
    "StoreError",
    "StoreConfigError",
    "StoreConnectionError",
]
