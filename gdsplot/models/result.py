"""
出图结果模型 - 单个单元的渲染状态与产物
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class PlotStatus(str, Enum):
    """出图状态"""
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PlotResult(BaseModel):
    """单元出图结果"""
    cell_name: str
    status: PlotStatus = PlotStatus.SUCCEEDED
    output_path: Path | None = None
    width: int | None = Field(None, description="像素宽（含边距）")
    height: int | None = Field(None, description="像素高（含边距）")
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == PlotStatus.SUCCEEDED

    @classmethod
    def failed(cls, cell_name: str, error: str) -> PlotResult:
        return cls(cell_name=cell_name, status=PlotStatus.FAILED, error=error)
