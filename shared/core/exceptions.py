"""
Typed exceptions raised by the CRUD layer.

Every error carries a machine readable ``status_code`` (see AppStatusCode)
and the HTTP status the API answers with. Callers catch by type, the
exception handlers in ``shared.exception_handler`` turn them into the
failure envelope.

    InventoryError
    |
    +-- NotFoundError        entity id does not resolve
    +-- ConflictError        uniqueness / exclusivity violation
    +-- InvalidStateError    transition not allowed from the current state
    +-- InvalidInputError    caller data fails a precondition
        |
        +-- InactiveUserError (also an InvalidStateError)
"""

from typing import Any, Dict, Optional

from shared.utils.app_status_code import AppStatusCode


class InventoryError(Exception):
    status_code: str = AppStatusCode.OPERATION_FAILED
    http_status: int = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(InventoryError):
    status_code = AppStatusCode.DATA_NOT_FOUND
    http_status = 404

    def __init__(self, entity: str, entity_id: Any = None, message: Optional[str] = None):
        super().__init__(
            message or f"{entity} not found",
            {"entity": entity, "id": str(entity_id) if entity_id is not None else None},
        )
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(InventoryError):
    status_code = AppStatusCode.CONFLICT


class InvalidStateError(InventoryError):
    status_code = AppStatusCode.INVALID_STATE

    def __init__(self, message: str, current: Optional[str] = None, required: Optional[str] = None):
        details = {}
        if current is not None:
            details["current"] = current
        if required is not None:
            details["required"] = required
        super().__init__(message, details)
        self.current = current
        self.required = required


class InvalidInputError(InventoryError):
    status_code = AppStatusCode.INVALID_INPUT


class InactiveUserError(InvalidInputError, InvalidStateError):
    status_code = AppStatusCode.INVALID_INPUT

    def __init__(self, user_id: Any):
        InventoryError.__init__(
            self,
            "User is inactive and cannot receive assignments",
            {"user_id": str(user_id)},
        )
        self.user_id = user_id
        self.current = "inactive"
        self.required = "active"
