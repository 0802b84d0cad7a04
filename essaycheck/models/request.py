from pydantic import BaseModel, ConfigDict, Field, field_validator


class EssayAnalysisRequest(BaseModel):
    essay: str = Field(min_length=1, description="The essay text to analyze")

    @field_validator("essay")
    @classmethod
    def validate_essay(cls, v):
        """Reject blank essays"""
        if not v or not v.strip():
            raise ValueError("Essay text cannot be empty")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "essay": "The right to vote is linked to many other significant rights and principles, such as equality and justice. It should not be denied to eligible citizens."
            }
        }
    )
