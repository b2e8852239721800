from typing import Any, Optional


class DynamoDBLookupError(Exception):
    """Root of every error raised by dynamodb_lookup.

    ``details`` holds short facts about the failure (an error code, say) and
    is appended to ``str(error)`` in brackets. Anything already part of the
    message belongs in the message only.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, **details: Any):
        self.message = message
        self.original_error = original_error
        self.details = {name: value for name, value in details.items() if value is not None}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{name}={value}" for name, value in sorted(self.details.items()))
        return f"{self.message} [{rendered}]"
