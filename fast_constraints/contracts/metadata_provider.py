from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fast_constraints.contracts.callback import Callback


class MetadataProvider(ABC):
    """
    Contract for sources of callback declarations used by `core.Validator`.
    """

    @abstractmethod
    def get_declarations(self, cls: type) -> tuple[Callback, ...]:
        """
        Return the declarations that apply to `cls`, in the order they run.

        Inherited declarations must already be included.
        """
        raise NotImplementedError
