# foodshare/core/errors.py
"""Domain errors raised by the services layer and mapped to HTTP by the routes"""


class FoodshareError(Exception):
    """Base class for all domain errors"""
    status_code = 500

    def __init__(self, message: str = "", **context):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(FoodshareError):
    """Malformed or inconsistent input"""
    status_code = 400


class PolicyViolation(ValidationError):
    """Input rejected by a business-type schedule policy"""
    status_code = 400


class NotFoundError(FoodshareError):
    """Referenced id does not resolve"""
    status_code = 404


class StoreError(FoodshareError):
    """Unexpected failure inside the entity store"""
    status_code = 500
