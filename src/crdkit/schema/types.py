"""Annotated integer aliases carrying scalar-kind and width bounds."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from crdkit.schema.shapes import Kind, ScalarKind

Int = Annotated[int, Kind(ScalarKind.SIGNED_INT)]
UInt = Annotated[int, Field(ge=0), Kind(ScalarKind.UNSIGNED_INT)]
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1), Kind(ScalarKind.SIGNED_INT)]
UInt32 = Annotated[int, Field(ge=0, le=2**32 - 1), Kind(ScalarKind.UNSIGNED_INT)]
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1), Kind(ScalarKind.SIGNED_INT)]
UInt64 = Annotated[int, Field(ge=0, le=2**64 - 1), Kind(ScalarKind.UNSIGNED_INT)]
