from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

from pydantic import BaseModel

from fast_constraints.contracts.callback import Callback

if TYPE_CHECKING:
    from fast_constraints.core.validation_result import ValidationResult
    from fast_constraints.core.validator import Validator


class Schema(BaseModel):
    """
    Base schema whose callback constraints run after pydantic parsing.

    Declare callbacks with ``@callback`` methods or via an inner Meta class:

        class AuthorSchema(Schema):
            first_name: str

            class Meta:
                constraints = [
                    Callback("validate_name"),
                ]

            def validate_name(self, context):
                if self.first_name in BLOCKLIST:
                    context.build_violation("This name sounds totally fake!") \\
                        .at_path("first_name") \\
                        .add_violation()
    """

    class Meta:
        constraints: List[Callback] = []  # override in subclasses

    async def avalidate(
        self,
        *,
        groups: Optional[Sequence[str] | str] = None,
        validator: Optional[Validator] = None,
    ) -> ValidationResult:
        """
        Run the schema's callbacks.

        Raises:
            ValidationFailedException: If any callback recorded a violation.
        """
        from fast_constraints.core.validator import get_validator  # local import to avoid cycles

        validator = validator or get_validator()
        return await validator.validate_or_fail(self, groups=groups)
