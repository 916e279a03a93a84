from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

BrowseFlag = Literal[
    "maySortByNotation",
    "defaultSortByNotation",
    "notationAlpha",
    "notationDotted",
    "notationFloat",
    "defaultDisplayNotation",
    "includeConceptSchemes",
    "includeCollections",
    "mayResolveResources",
]
NotationFormat = Literal["notationAlpha", "notationDotted", "notationFloat"]

BROWSE_FLAGS: tuple[str, ...] = (
    "maySortByNotation",
    "defaultSortByNotation",
    "notationAlpha",
    "notationDotted",
    "notationFloat",
    "defaultDisplayNotation",
    "includeConceptSchemes",
    "includeCollections",
    "mayResolveResources",
)
NOTATION_FORMATS: tuple[str, ...] = ("notationAlpha", "notationDotted", "notationFloat")


class BrowseConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    may_sort_by_notation: bool = False
    default_sort_by_notation: bool = False
    notation_format: NotationFormat | None = None
    default_display_notation: bool = False
    include_concept_schemes: bool = False
    include_collections: bool = False
    may_resolve_resources: bool = False

    @classmethod
    def from_flags(cls, flags: Iterable[str] | None) -> BrowseConfiguration:
        """Parse the stored browse flag names; unknown names are logged and skipped."""
        values: dict[str, object] = {}
        for flag in flags or ():
            if flag in NOTATION_FORMATS:
                values["notation_format"] = flag
            elif flag == "maySortByNotation":
                values["may_sort_by_notation"] = True
            elif flag == "defaultSortByNotation":
                values["default_sort_by_notation"] = True
            elif flag == "defaultDisplayNotation":
                values["default_display_notation"] = True
            elif flag == "includeConceptSchemes":
                values["include_concept_schemes"] = True
            elif flag == "includeCollections":
                values["include_collections"] = True
            elif flag == "mayResolveResources":
                values["may_resolve_resources"] = True
            else:
                logger.error("Unknown browse flag: %s", flag)
        return cls.model_validate(values)

    @property
    def notation_sort_enabled(self) -> bool:
        return self.may_sort_by_notation and self.notation_format is not None
