"""Synchronous command submission used by the API and the dashboard."""

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.errors import RepositoryFailure

logger = structlog.get_logger(__name__)

# Each retry reprocesses the command against freshly loaded state
VERSION_CONFLICT_RETRIES = 1


def _is_version_conflict(exc) -> bool:
    return isinstance(exc, ExpectedVersionError) or isinstance(exc.__cause__, ExpectedVersionError)


def submit(command):
    """Process ``command`` and return its handler's result.

    Validation and not-found errors propagate unchanged. A write that lost a
    race with another request is processed once more against the new state.
    Anything else is a storage or infrastructure problem and surfaces as
    ``RepositoryFailure``.
    """
    attempt = 0
    while True:
        try:
            return current_domain.process(command, asynchronous=False)
        except (ValidationError, ObjectNotFoundError):
            raise
        except Exception as exc:
            if _is_version_conflict(exc) and attempt < VERSION_CONFLICT_RETRIES:
                attempt += 1
                logger.warning(
                    "Concurrent update detected, reprocessing command",
                    command=type(command).__name__,
                    attempt=attempt,
                )
                continue

            logger.error(
                "Command processing failed",
                command=type(command).__name__,
                error=str(exc),
                exc_info=True,
            )
            raise RepositoryFailure(f"{type(command).__name__} could not be completed: {exc}") from exc
