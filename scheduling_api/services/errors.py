"""Errors raised by the service layer.

Each error carries a machine readable ``code`` and the HTTP status the routes
should answer with. Routes turn them into ``HTTPException`` via ``to_http``.
"""

from fastapi import HTTPException, status


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, code: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_http(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={'code': self.code, 'message': self.message},
        )


class SchedulingError(ServiceError):
    """A create, list or calendar request that cannot be fulfilled."""


class PostNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, post_id: int) -> None:
        super().__init__('no_post', f'Post {post_id} does not exist.')
        self.post_id = post_id


INVALID_FORMAT = 'invalid_format'
IN_PAST = 'in_past'
INVALID_TYPE = 'invalid_type'
INVALID_YEAR = 'invalid_year'
SLOT_RESERVED = 'slot_reserved'
PERSISTENCE_FAILURE = 'persistence_failure'


def persistence_failure(message: str = 'Error in insert.') -> SchedulingError:
    return SchedulingError(
        PERSISTENCE_FAILURE,
        message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
