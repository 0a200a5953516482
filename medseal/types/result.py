"""Two-variant result type for operations that can fail"""
from enum import Enum
from typing import Any, Literal, Union
from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Failures surfaced to callers"""
    VALIDATION_ERROR = "validation_error"
    REMOTE_REJECTED = "remote_rejected"


class Success(BaseModel):
    """Successful outcome carrying a value"""
    success: Literal[True] = True
    value: Any = None


class Failure(BaseModel):
    """Failed outcome carrying its kind and a displayable message"""
    success: Literal[False] = False
    kind: ErrorKind
    message: str = ""


Result = Union[Success, Failure]
