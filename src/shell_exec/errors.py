"""Errors raised by shell sessions."""


class ShellExecError(RuntimeError):
    """Base class for errors raised by shell_exec."""


class InvalidStateError(ShellExecError):
    """A session operation was called in a state that does not allow it."""

    def __init__(self, state, operation: str, message: str | None = None):
        self.state = state
        self.operation = operation
        super().__init__(message or f"cannot {operation} a session in state {state.value}")


class NoProcessStartedError(InvalidStateError):
    def __init__(self, state, operation: str = "wait"):
        super().__init__(state, operation, "No process has been started yet")


class AbnormalTerminationError(ShellExecError):
    """The shell did not exit normally (killed by a signal, or the wait failed).

    ``response`` holds whatever output was captured before termination.
    """

    def __init__(self, message: str, response, signal: int | None = None):
        self.response = response
        self.signal = signal
        super().__init__(message)
