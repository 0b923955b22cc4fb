"""Resolved engine version model."""

from pydantic import BaseModel, ConfigDict, field_validator

LATEST = "latest"


class ResolvedVersion(BaseModel):
    """A concrete engine version, confirmed against the registry or trusted as given.

    ``from_registry`` is True when the string was produced by the registry
    (``"latest"`` lookups) and False when it is the caller's own request,
    returned unchanged.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    from_registry: bool = False

    @field_validator("version")
    @classmethod
    def _not_sentinel(cls, value: str) -> str:
        if value == LATEST:
            raise ValueError("a resolved version cannot be the 'latest' sentinel")
        return value

    def __str__(self) -> str:
        return self.version
