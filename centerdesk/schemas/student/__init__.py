from .base import StudentBase
from .requests import StudentCreate, StudentUpdate
from .responses import StudentResponse
