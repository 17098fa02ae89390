from __future__ import annotations

from typing import Dict

from pydantic import Field
from typing_extensions import Annotated

Temperature = Annotated[float, Field(ge=0, le=2)]
Probability = Annotated[float, Field(ge=0, le=1)]
NumRequests = Annotated[int, Field(ge=1, le=10)]
Headers = Dict[str, str]
