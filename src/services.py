"""DB services for the models"""

from src.helpers.db_helper import BaseModelService
from src.models import ExecutionRequest


class ExecutionRequestService(BaseModelService[ExecutionRequest]):
    """
    DB Service for ExecutionRequest model.
    The table is the queue consumed by the execution workers, so this is the job execution backend.
    """

    @classmethod
    def create(cls, request: ExecutionRequest) -> str:
        """Enqueue the request, returning its id"""
        return cls.insert_one(request).id
