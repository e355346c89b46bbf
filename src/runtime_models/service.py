"""Runtime validation models for the service configuration."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

NonEmptyStr = Annotated[str, Field(min_length=1)]
PositiveFloat = Annotated[float, Field(gt=0)]
NonNegativeFloat = Annotated[float, Field(ge=0)]


class RuntimeBase(BaseModel):
    """Base class for runtime validation models."""

    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        frozen=True,
        populate_by_name=True,
    )


class BooksImportRuntime(RuntimeBase):
    enabled: bool = False


class BooksRuntime(RuntimeBase):
    """Validated ``[books]`` section."""

    path: NonEmptyStr | None = None
    import_: BooksImportRuntime = Field(default_factory=BooksImportRuntime, alias="import")


class MoviesRuntime(RuntimeBase):
    path: NonEmptyStr | None = None


class TodosExportRuntime(RuntimeBase):
    """Validated ``[todos.export]`` section."""

    enabled: bool = False
    fixed_rate_s: PositiveFloat = 5.0
    initial_delay_s: NonNegativeFloat = 5.0


class TodosRuntime(RuntimeBase):
    path: NonEmptyStr | None = None
    export: TodosExportRuntime = Field(default_factory=TodosExportRuntime)


class ServiceConfigRuntime(RuntimeBase):
    """Validated service configuration."""

    books: BooksRuntime = Field(default_factory=BooksRuntime)
    movies: MoviesRuntime = Field(default_factory=MoviesRuntime)
    todos: TodosRuntime = Field(default_factory=TodosRuntime)


__all__ = [
    "BooksImportRuntime",
    "BooksRuntime",
    "MoviesRuntime",
    "RuntimeBase",
    "ServiceConfigRuntime",
    "TodosExportRuntime",
    "TodosRuntime",
]
