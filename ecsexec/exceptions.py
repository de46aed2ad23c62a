class EcsExecError(Exception):
    """Base class for every failure that should end the run with exit code 1."""


class DependencyMissingError(EcsExecError):
    pass


class ConfigError(EcsExecError):
    pass


class ParseError(EcsExecError):
    pass


class TaskParseError(ParseError):
    pass


class CredentialError(ParseError):
    pass


class NotFoundError(EcsExecError):
    def __init__(self, what, searched=None):
        self.what = what
        self.searched = searched
        message = f"No {what} found"
        if searched is not None:
            message += f" matching '{searched}'"
        super().__init__(message)


class UpstreamApiError(EcsExecError):
    def __init__(self, operation, failures=None, cause=None):
        self.operation = operation
        self.failures = failures or []
        if failures:
            message = f"ECS {operation} reported failures: {failures!r}"
        else:
            message = f"Failed to contact ECS API and {operation}: {cause}"
        super().__init__(message)
