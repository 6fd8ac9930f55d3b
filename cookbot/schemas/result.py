from typing import Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class Ok(BaseModel, Generic[DataT]):
    model_config = ConfigDict(extra="forbid", frozen=True)

    success: Literal[True] = True
    message: str
    data: DataT | None = None


class Err(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    success: Literal[False] = False
    message: str
    error: str | None = None


# Callers branch on ``result.success``; the Literal fields keep the two shapes disjoint.
ActionResult = Union[Ok, Err]
