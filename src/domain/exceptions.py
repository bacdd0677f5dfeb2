"""Domain exceptions."""


class NowcoderACError(Exception):
    """Base error for contest workspace operations."""

    pass


class InvalidConfigError(NowcoderACError):
    """Workspace config document is missing, unreadable or lacks a contest id."""

    pass


class NoActiveWorkspaceError(NowcoderACError):
    """An operation needs an open contest workspace but none is open."""

    pass


class ContestSessionError(NowcoderACError):
    """A judge operation requested through the session failed."""

    pass


class ProblemNotFoundError(ContestSessionError):
    """Problem index does not exist in the contest."""

    def __init__(self, index: str):
        self.index = index
        super().__init__(f"Problem {index!r} does not exist")


class SubmissionError(ContestSessionError):
    """Submitting a solution failed before a submission id was obtained."""

    pass


class MissingCompilerError(NowcoderACError):
    """No compiler was given and the code carries no compiler marker."""

    pass
