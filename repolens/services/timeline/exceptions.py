"""Timeline query exceptions."""


class FilterValidationError(ValueError):
    """Raised for an unrecognized event filter or time range token."""

    def __init__(self, kind: str, value: str, allowed: list[str]):
        self.kind = kind
        self.value = value
        self.allowed = allowed
        self.message = f"Invalid {kind} '{value}'. Expected one of: {', '.join(allowed)}"
        super().__init__(self.message)
