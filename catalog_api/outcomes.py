# catalog_api/outcomes.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

# Results returned by the orchestrator. Each one knows the HTTP status the
# transport should answer with.

GENERIC_FAILURE_MESSAGE = "An error occurred while processing your request"


@dataclass(frozen=True)
class Success:
    data: Any
    status_code: int = 200

    def body(self) -> Any:
        return self.data


@dataclass(frozen=True)
class ValidationFailed:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    status_code: int = 400

    def body(self) -> Dict[str, List[str]]:
        return self.errors


@dataclass(frozen=True)
class BadRequest:
    message: str
    status_code: int = 400

    def body(self) -> Dict[str, str]:
        return {"message": self.message}


@dataclass(frozen=True)
class NotFound:
    message: str
    status_code: int = 404

    def body(self) -> Dict[str, str]:
        return {"message": self.message}


@dataclass(frozen=True)
class InternalFailure:
    message: str = GENERIC_FAILURE_MESSAGE
    status_code: int = 500

    def body(self) -> Dict[str, str]:
        return {"message": self.message}


Outcome = Union[Success, ValidationFailed, BadRequest, NotFound, InternalFailure]
