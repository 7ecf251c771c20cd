"""Domain exceptions for wizard task execution."""


class WizardFatalError(Exception):
    """Exception raised by tasks to signal the wizard should terminate."""

    def __init__(self, message: str, source: str | None = None):
        """
        Initialize fatal error.

        Args:
            message: Error message shown to the user
            source: Optional name of the task/component that raised the error
        """
        self.message = message
        self.source = source
        super().__init__(self.message)


class PathConflictError(WizardFatalError):
    """Raised when the project directory already exists."""

    pass


class AuditParseError(WizardFatalError):
    """Raised when npm audit output is not a usable report."""

    pass
