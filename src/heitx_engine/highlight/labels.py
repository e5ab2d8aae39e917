"""Semantic labels assigned per scalar and the styles used to draw them."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Label(str, Enum):
    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    PRIMARY_KEYWORD = "primary_keyword"
    SECONDARY_KEYWORD = "secondary_keyword"


# fmt: off
LABEL_STYLES: Mapping[Label, str] = MappingProxyType({
    Label.NONE:              "rgb(255,255,255)",
    Label.NUMBER:            "rgb(220,163,163)",
    Label.MATCH:             "rgb(255,0,0)",
    Label.STRING:            "rgb(211,54,130)",
    Label.CHARACTER:         "rgb(108,113,196)",
    Label.COMMENT:           "rgb(0,205,0)",
    Label.BLOCK_COMMENT:     "rgb(154,255,154)",
    Label.PRIMARY_KEYWORD:   "rgb(181,137,0)",
    Label.SECONDARY_KEYWORD: "rgb(42,161,152)",
})
# fmt: on


def style_for(label: Label) -> str:
    return LABEL_STYLES.get(label, LABEL_STYLES[Label.NONE])


__all__ = ["Label", "LABEL_STYLES", "style_for"]
