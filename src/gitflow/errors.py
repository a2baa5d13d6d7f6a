"""Error type raised when a lifecycle command has to stop."""


class FlowError(Exception):
    """Abort the current command with a diagnostic and a non-zero exit status.

    Raised by precondition guards, name resolution and failed git primitives.
    Steps already performed are left in place; every finish step is safe to re-run.
    """

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
