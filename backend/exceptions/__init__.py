from typing import Optional, Dict, Any

class KlarifikasiException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

class APIException(KlarifikasiException):
    pass

class SearchException(APIException):
    def __init__(self, reason: str, recoverable: bool = True, status_code: Optional[int] = None):
        super().__init__(
            f"Search service error: {reason}",
            {"reason": reason, "recoverable": recoverable, "status_code": status_code}
        )

    @property
    def recoverable(self) -> bool:
        return bool(self.details.get("recoverable"))

class ValidationException(KlarifikasiException, ValueError):
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )
