from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic import StringConstraints

DecimalText = Annotated[StrictStr, StringConstraints(pattern=r"^(0|[1-9][0-9]*)$")]
CounterValue = Annotated[StrictInt, Field(ge=0)]


class ConfigUpdateDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    collision_mode: Optional[StrictBool] = Field(default=None, alias="collisionMode")
    opaque_policy: Optional[Literal["fields", "atomic"]] = Field(
        default=None, alias="opaquePolicy"
    )


class ExportedStateDTO(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    registry_mapping: Dict[StrictStr, DecimalText] = Field(
        default_factory=dict, alias="registryMapping"
    )
    collision_counters: Dict[StrictStr, CounterValue] = Field(
        default_factory=dict, alias="collisionCounters"
    )
