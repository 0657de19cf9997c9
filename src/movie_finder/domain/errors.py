"""Error taxonomy shared by services, adapters and the HTTP layer."""


class MovieFinderError(Exception):
    """Base class for application errors."""


class BadRequestError(MovieFinderError):
    """Client-input fault; reported as HTTP 400 and never retried."""


class ValidationError(BadRequestError):
    """Invalid caller input such as a non-positive id or a short query."""


class CapacityError(BadRequestError):
    """A session's favorites bucket is full."""


class MissingSessionError(MovieFinderError):
    """No session id reached the favorites store.

    This is an integration fault: the session middleware failed to attach an
    id to the request.
    """


class NotFoundError(MovieFinderError):
    """The upstream provider has no such resource."""


class UpstreamError(MovieFinderError):
    """The upstream call failed for any reason other than a missing resource."""
