from pydantic import BaseModel, Field


class Target(BaseModel):
    key: str = Field(..., description="Encoded store key the target was decoded from")
    address: str = Field(..., min_length=1, description="URL to fetch")
    extraction_rule: str = Field(..., min_length=1, description="CSS selector for the watched region")
