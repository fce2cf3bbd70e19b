from dataclasses import asdict, dataclass
from typing import Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from church_manager.exceptions import ChurchManagerError, StorageError

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Success or failure of a service operation, with data and a message."""

    is_successful: bool
    data: Optional[T] = None
    message: str = ""
    error: Optional[ChurchManagerError] = None

    @classmethod
    def success(cls, data: T, message: str = "Operation successful") -> "OperationResult[T]":
        return cls(is_successful=True, data=data, message=message)

    @classmethod
    def failure(cls, message: str, error: Optional[ChurchManagerError] = None) -> "OperationResult[T]":
        return cls(is_successful=False, data=None, message=message, error=error)

    @classmethod
    def from_exception(cls, prefix: str, error: Exception) -> "OperationResult[T]":
        if isinstance(error, SQLAlchemyError):
            error = StorageError(str(error))
        elif not isinstance(error, ChurchManagerError):
            error = ChurchManagerError(str(error))
        return cls.failure(f"{prefix}: {str(error)}", error=error)

    def to_dict(self):
        data = self.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return {
            "is_successful": self.is_successful,
            "data": data,
            "message": self.message,
        }


@dataclass
class ChurchStatistics:
    total_members: int = 0
    active_members: int = 0
    # Everything that is not Active, visitors included
    inactive_members: int = 0
    visitor_members: int = 0

    def to_dict(self):
        return asdict(self)
