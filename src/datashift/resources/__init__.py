from datashift.resources.queue import QueueResource
from datashift.resources.review import ReviewResource
from datashift.resources.task import TaskResource

__all__ = ["TaskResource", "QueueResource", "ReviewResource"]
