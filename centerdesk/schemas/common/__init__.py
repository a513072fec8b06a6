from .base import RecordModel, RecordResponse
from .notice import Notice, MutationResponse
from .error import ErrorResponse
