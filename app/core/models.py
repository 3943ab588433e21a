from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A single catalog entry as served by product-service."""

    model_config = ConfigDict(extra="ignore")

    name: str
    price: float
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class QueryResult(BaseModel):
    """Defines the structure for the response to the user's query."""

    query: str = Field(..., description="The question exactly as it was received.")
    answer: str
