"""Category domain model."""

from dataclasses import dataclass
from typing import Optional

from pocketledger.domain.models.enums import CategoryType

# Pseudo-category carried by every transfer; never stored or user-editable.
TRANSFER_CATEGORY_ID = "cat-transfer"


@dataclass
class Category:
    """Income or expense classification for non-transfer transactions."""

    id: str
    name: str
    type: CategoryType
    icon: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = CategoryType(self.type)
