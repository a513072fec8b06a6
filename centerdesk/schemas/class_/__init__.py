from .requests import ClassCreate, ClassUpdate, AssignStudentsRequest, AssignInstructorsRequest
from .responses import ClassResponse, ReconcileResponse
