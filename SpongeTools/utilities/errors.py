# errors.py
# Exception hierarchy shared by every construction


class SpongeError(Exception):
    """Base class for all SpongeTools errors."""


class ParameterError(SpongeError, ValueError):
    """Invalid construction parameters; raised before an instance exists."""


class SequencingError(SpongeError, RuntimeError):
    """An operation was called before the step it depends on."""


class NotKeyedError(SequencingError):
    def __init__(self, name: str = "cipher"):
        super().__init__(f"{name}: not keyed (call rekey first)")


class NotInitializedError(SequencingError):
    def __init__(self, name: str = "cipher"):
        super().__init__(f"{name}: not initialized (call init first)")


class InvalidDomainValueError(SpongeError, ValueError):
    """All-zero keys and nonces are rejected."""

    def __init__(self, what: str):
        super().__init__(f"invalid domain value: {what} must be non-zero")


class EmptyInputError(SpongeError, ValueError):
    pass


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ParameterError(message)
