"""Shared pydantic configuration for ConexPro models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model with snake_case attributes and camelCase wire names.

    Both spellings are accepted on input; ``model_dump(by_alias=True)``
    produces the camelCase form stored in the document store. Infinite
    and NaN floats are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class FrozenCamelModel(CamelModel):
    """Immutable value snapshot (form rows and estimator results)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        frozen=True,
    )
