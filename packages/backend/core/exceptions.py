"""Domain exceptions."""


class CatalogError(Exception):
    """Base catalog error."""
    pass


class SourceUnavailableError(CatalogError):
    """A catalog tier failed or returned nothing usable."""
    pass


class SourceNotConfiguredError(CatalogError):
    """A catalog tier has no backing client configured."""
    pass


class NoModelsAvailableError(CatalogError):
    """No tier, including the static table, knows the task type."""

    def __init__(self, task_type: str):
        super().__init__(f"No models available for task: {task_type}")
        self.task_type = task_type


class AIServiceError(Exception):
    """Language model call failed."""
    pass


class AIServiceNotConfiguredError(AIServiceError):
    """No language model credential is configured."""
    pass


class AuthError(Exception):
    """Missing, invalid or expired credentials."""
    pass
