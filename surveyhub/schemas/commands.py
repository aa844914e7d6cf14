from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class CreateCommand(Generic[T]):
    input: T


@dataclass(frozen=True)
class UpdateCommand(Generic[T]):
    id: str
    input: T


SaveCommand = Union[CreateCommand[T], UpdateCommand[T]]


def to_command(payload: T) -> "SaveCommand[T]":
    """Turn a body carrying an optional ``id`` into an explicit create or update."""
    payload_id = getattr(payload, "id", None)
    if payload_id:
        return UpdateCommand(id=payload_id, input=payload)
    return CreateCommand(input=payload)
