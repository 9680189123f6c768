class BbLensError(Exception):
    """Base class for errors raised by bblens."""


class InvalidStateFilterError(BbLensError):
    pass


class InvalidReviewStatusError(BbLensError):
    pass


class InvalidPullRequestStatusError(BbLensError):
    pass
