from enum import Enum


class ReviewStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


REVIEW_STATUS_CHOICES = [(status.value, status.name.title()) for status in ReviewStatus]
