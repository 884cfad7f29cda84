"""Pydantic models for pipelines and their stages."""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class PipelineCreate(BaseModel):
    """Model for creating or replacing a pipeline."""

    name: str = Field(
        ...,
        min_length=1,
        description="Pipeline name",
        examples=["Sales Pipeline"]
    )
    description: Optional[str] = Field(default=None, description="Free-form description")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Sales Pipeline",
                "description": "B2B sales process"
            }
        }
    )


class StageCreate(BaseModel):
    """Model for creating a stage."""

    pipeline_id: int = Field(..., gt=0, description="Pipeline the stage belongs to")
    name: str = Field(..., min_length=1, description="Stage name", examples=["Prospecting"])
    position: int = Field(..., ge=0, description="Position of the stage within its pipeline")


class StageUpdate(BaseModel):
    """Model for updating a stage. The owning pipeline is fixed."""

    name: str = Field(..., min_length=1, description="Stage name")
    position: int = Field(..., ge=0, description="Position of the stage within its pipeline")


class PipelineStageCreate(StageUpdate):
    """Stage body posted under a pipeline; the pipeline comes from the path."""

    def for_pipeline(self, pipeline_id: int) -> StageCreate:
        return StageCreate(pipeline_id=pipeline_id, **self.model_dump())
