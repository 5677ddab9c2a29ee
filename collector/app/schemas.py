from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Host(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    urn: str = Field(..., examples=["urn:sites:1:hosts:1"])
    name: str
    ip: str | None = None


class HostList(BaseModel):
    hosts: list[Host]


class MetricRequestEntry(BaseModel):
    urn: str
    metric_id: list[str]


class MetricSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    metric_id: str = Field(validation_alias=AliasChoices("metric_id", "metricId"))
    # Raw JSON scalar; the renderer decides how it becomes text.
    metric_value: Any = Field(None, validation_alias=AliasChoices("metric_value", "metricValue"))


class MetricResponseItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    object_name: str = Field(validation_alias=AliasChoices("object_name", "objectName"))
    urn: str | None = None
    value: list[MetricSample] = Field(default_factory=list)
