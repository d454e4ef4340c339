from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BulkResponseItemResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(default="", alias="_index")
    type: Optional[str] = Field(default=None, alias="_type")
    id: str = Field(default="", alias="_id")
    version: Optional[int] = Field(default=None, alias="_version")
    status: int = 0
    found: Optional[bool] = None
    error: Optional[Any] = None


class BulkResponseItem(BaseModel):
    create: Optional[BulkResponseItemResult] = None
    delete: Optional[BulkResponseItemResult] = None
    update: Optional[BulkResponseItemResult] = None
    index: Optional[BulkResponseItemResult] = None

    @property
    def result(self) -> Optional[BulkResponseItemResult]:
        return self.index or self.create or self.update or self.delete


class BulkResponse(BaseModel):
    took: float = 0
    errors: bool = False
    items: list[BulkResponseItem] = []

    def failed_items(self) -> list[BulkResponseItemResult]:
        """Results that carry an item-level error."""
        return [
            item.result
            for item in self.items
            if item.result is not None and item.result.error is not None
        ]
