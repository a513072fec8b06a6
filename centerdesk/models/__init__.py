from .base import Base
from .document import Document

__all__ = [
    'Base',
    'Document',
]
