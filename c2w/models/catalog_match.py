"""Result model for a winget catalog lookup."""

from pydantic import BaseModel, ConfigDict, model_validator


class CatalogMatch(BaseModel):
    """Represents the outcome of searching the target catalog for one package.

    When ``found`` is false every other field is None; ``id`` is the preferred
    install target when present.
    """

    model_config = ConfigDict(frozen=True)

    found: bool = False
    id: str | None = None
    display_name: str | None = None
    version: str | None = None

    @model_validator(mode="after")
    def _not_found_has_no_fields(self) -> "CatalogMatch":
        if not self.found and (self.id or self.display_name or self.version):
            msg = "A not-found catalog match cannot carry id, display_name or version"
            raise ValueError(msg)
        return self

    @classmethod
    def not_found(cls) -> "CatalogMatch":
        return cls(found=False)

    def install_target(self, package: str) -> str:
        """Return the identifier to install: the catalog id, else the raw name."""
        return self.id or package
