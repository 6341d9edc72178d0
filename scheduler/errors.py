class SchedulerError(Exception):
    kind = "SchedulerError"

    def __init__(self, message=""):
        super().__init__(message)
        self.message = message


class NotFound(SchedulerError):
    """Resource is missing or owned by another user."""

    kind = "NotFound"


class ValidationFailure(SchedulerError):
    kind = "ValidationFailure"


class ConflictFailure(SchedulerError):
    kind = "ConflictFailure"


class UpstreamFailure(SchedulerError):
    """The column classifier failed or produced an unusable mapping."""

    kind = "UpstreamFailure"


class PersistenceFailure(SchedulerError):
    kind = "PersistenceFailure"
