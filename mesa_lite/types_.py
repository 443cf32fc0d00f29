"""Type aliases for the mesa_lite package."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any, Literal

###----- Space -----###
Coordinate = tuple[int, int]

###----- Activation -----###
# A behavior is either the name of a registered behavior / agent method or a
# callable taking the agent as first positional argument.
Behavior = str | Callable[..., Any]
GroupKey = str | Callable[[Any], Hashable]

###----- Data collection -----###
# A reporter is either a registered attribute name or an accessor callable.
Reporter = str | Callable[[Any], Any]
StorageBackend = Literal["memory", "csv", "parquet"]
