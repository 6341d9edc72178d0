import structlog
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from ..errors import (
    ConflictFailure,
    NotFound,
    PersistenceFailure,
    SchedulerError,
    UpstreamFailure,
    ValidationFailure,
)

logger = structlog.get_logger()

STATUS_BY_ERROR = {
    NotFound: status.HTTP_404_NOT_FOUND,
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    ConflictFailure: status.HTTP_409_CONFLICT,
    UpstreamFailure: status.HTTP_502_BAD_GATEWAY,
    PersistenceFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def scheduler_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        logger.exception("persistence_failure", view=type(context.get("view")).__name__)
        exc = PersistenceFailure("The data store is unavailable")

    if isinstance(exc, SchedulerError):
        code = STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"error": exc.kind, "detail": exc.message}, status=code)

    return exception_handler(exc, context)
