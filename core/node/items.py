"""Item models exchanged between the host and nodes."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PairedItem(BaseModel):
    """Back-reference from an output item to the input item that produced it."""
    item: int


class NodeExecutionData(BaseModel):
    """One item flowing into or out of a node."""

    model_config = ConfigDict(populate_by_name=True)

    json_data: Any = Field(default_factory=dict, alias="json")
    paired_item: Optional[PairedItem] = Field(default=None, alias="pairedItem")

    @classmethod
    def for_item(cls, data: Any, index: int) -> "NodeExecutionData":
        return cls(json_data=data, paired_item=PairedItem(item=index))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"json": self.json_data}
        if self.paired_item is not None:
            result["pairedItem"] = {"item": self.paired_item.item}
        return result
