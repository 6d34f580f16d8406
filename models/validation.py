"""
Validation result models
"""

from pydantic import BaseModel, Field
from typing import List


class ValidationResult(BaseModel):
    """Outcome of validating one identifier.

    Errors make the identifier unusable; warnings are advisory and must not
    block persistence.
    """
    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def __bool__(self):
        return self.is_valid

    def add_error(self, error: str):
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        self.warnings.append(warning)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, errors=[error])
