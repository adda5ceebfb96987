"""Stackview exceptions."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class StackviewError(Exception):
    """Base class for custom exceptions raised by Stackview."""

    message: str
    """Error message."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Instantiate class."""
        if getattr(self, "message", None):
            super().__init__(self.message, *args, **kwargs)
        else:
            super().__init__(*args, **kwargs)


class ConfigNotFound(StackviewError):
    """Configuration file could not be found."""

    path: Path

    def __init__(self, *, path: Path) -> None:
        """Instantiate class.

        Args:
            path: Path where the config file was expected to be found.

        """
        self.path = path
        self.message = f"config file not found at path {path}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return _rebuild, (self.__class__, {"path": self.path})


class UnknownConfigKey(StackviewError):
    """A setting was requested or provided that is not part of the schema."""

    key: str

    def __init__(self, key: str) -> None:
        """Instantiate class.

        Args:
            key: The offending (dotted) setting name.

        """
        self.key = key
        self.message = f"unknown config key: {key}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.key,)


class StackNotFound(StackviewError):
    """The requested stack is unknown to the control plane."""

    stack_name: str

    def __init__(self, stack_name: str) -> None:
        """Instantiate class.

        Args:
            stack_name: Name of the stack that does not exist.

        """
        self.stack_name = stack_name
        self.message = f"stack {stack_name} does not exist"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.stack_name,)


class AuthFailure(StackviewError):
    """Credentials were missing or rejected by the control plane."""

    reason: str

    def __init__(self, reason: str) -> None:
        """Instantiate class.

        Args:
            reason: Description of why authentication failed.

        """
        self.reason = reason
        self.message = f"authentication failed: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.reason,)


class TransientBackend(StackviewError):
    """The control plane is reachable but temporarily unavailable."""

    operation: str
    reason: str

    def __init__(self, operation: str, reason: str) -> None:
        """Instantiate class.

        Args:
            operation: Name of the API operation that failed.
            reason: Error reported by the control plane.

        """
        self.operation = operation
        self.reason = reason
        self.message = f"{operation} is temporarily unavailable: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.operation, self.reason)


class BackendError(StackviewError):
    """The control plane rejected a call or could not be reached."""

    operation: str
    reason: str

    def __init__(self, operation: str, reason: str) -> None:
        """Instantiate class.

        Args:
            operation: Name of the API operation that failed.
            reason: Error reported by the control plane or botocore.

        """
        self.operation = operation
        self.reason = reason
        self.message = f"{operation} failed: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.operation, self.reason)


class TemplateParseError(StackviewError):
    """A template body could not be parsed."""

    stack_name: str
    reason: str

    def __init__(self, stack_name: str, reason: str) -> None:
        """Instantiate class.

        Args:
            stack_name: Name of the stack the template belongs to.
            reason: Why parsing failed.

        """
        self.stack_name = stack_name
        self.reason = reason
        self.message = f"unable to parse template of stack {stack_name}: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.stack_name, self.reason)


class PlannerNotFound(StackviewError):
    """The planner binary could not be located."""

    binary: str

    def __init__(self, binary: str) -> None:
        """Instantiate class."""
        self.binary = binary
        self.message = f"planner binary not found: {binary}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.binary,)


class PlannerStartError(StackviewError):
    """The planner could not be started for a reason other than a missing binary."""

    filename: str
    reason: str

    def __init__(self, filename: str, reason: str) -> None:
        """Instantiate class.

        Args:
            filename: File the operating system reported the error for.
            reason: Error reported by the operating system.

        """
        self.filename = filename
        self.reason = reason
        self.message = f"unable to run planner {filename}: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.filename, self.reason)


class PlanDirectoryNotFound(StackviewError):
    """The directory of the Terraform configuration does not exist."""

    path: Path

    def __init__(self, path: Path) -> None:
        """Instantiate class."""
        self.path = path
        self.message = f"terraform directory not found: {path}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.path,)


class PlannerFailed(StackviewError):
    """The planner exited with a non-zero status.

    The captured standard error of the planner is kept verbatim.

    """

    command: list[str]
    returncode: int
    stderr: str

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        """Instantiate class.

        Args:
            command: The command that was run.
            returncode: Exit status of the planner.
            stderr: Captured standard error output.

        """
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.message = f"{' '.join(command)} exited with status {returncode}"
        if stderr:
            self.message += f": {stderr}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.command, self.returncode, self.stderr)


class PlanDecodeError(StackviewError):
    """The output of the planner could not be decoded into a plan."""

    reason: str

    def __init__(self, reason: str) -> None:
        """Instantiate class.

        Args:
            reason: Why decoding failed.

        """
        self.reason = reason
        self.message = f"unable to decode plan: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.reason,)


class OutputWriteError(StackviewError):
    """Writing rendered views to the output stream failed."""

    reason: str

    def __init__(self, reason: str) -> None:
        """Instantiate class."""
        self.reason = reason
        self.message = f"unable to write output: {reason}"
        super().__init__()

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, (self.reason,)


class RendererAlreadyFlushed(StackviewError):
    """A renderer was flushed more than once."""

    message = "renderer has already been flushed"

    def __reduce__(self) -> tuple[Any, ...]:
        """Support for pickling."""
        return self.__class__, ()


def _rebuild(cls: type[StackviewError], kwargs: dict[str, Any]) -> StackviewError:
    """Recreate a keyword-only exception when unpickling."""
    return cls(**kwargs)
