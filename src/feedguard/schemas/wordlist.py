"""Schema for the shipped blocked-term artifact."""

from pydantic import BaseModel, Field, model_validator


class BlockedTermsConfig(BaseModel):
    """Versioned blocked-term list, either flat or split into categories."""

    version: str = Field(..., min_length=1)
    terms: list[str] | None = None
    categories: dict[str, list[str]] | None = None

    @model_validator(mode="after")
    def _exactly_one_layout(self) -> "BlockedTermsConfig":
        if (self.terms is None) == (self.categories is None):
            raise ValueError("blocked-term config needs exactly one of 'terms' or 'categories'")
        return self
