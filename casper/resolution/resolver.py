"""Apply one component descriptor to one entity.

The resolver runs the descriptor's hooks in order (trigger, get_data,
requirement check, process, transform) and reports the result as an explicit
outcome instead of letting exceptions escape:

- ``SKIPPED``: the trigger declined, nothing happened
- ``Ok``: the component resolved; the builder adds the id to the passed set
- ``Err``: the component failed; the builder hands the issue to the
  error collector, which removes the entity from the run
"""

from dataclasses import dataclass
from typing import Any

from ..core.models import ErrorKind, ResolutionIssue
from .context import ResolutionContext
from .errors import MissingRequirementError, ResolutionError
from .registry import ComponentDescriptor


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


OMIT = _Omit()
"""Returned by ``process`` to resolve successfully without writing a value."""

# Malformed payloads surface as these when a hook indexes into them
_DATA_ERRORS = (KeyError, TypeError, ValueError, AttributeError, IndexError)


@dataclass(frozen=True)
class Ok:
    value: Any
    written: bool = True


@dataclass(frozen=True)
class Err:
    issue: ResolutionIssue

    @classmethod
    def of(cls, kind: ErrorKind, message: str, component: str | None = None) -> "Err":
        return cls(ResolutionIssue(kind=kind, component=component, message=message))


@dataclass(frozen=True)
class Skipped:
    pass


SKIPPED = Skipped()

Outcome = Ok | Err | Skipped


def default_trigger(descriptor: ComponentDescriptor, ctx: ResolutionContext) -> bool:
    return descriptor.key in ctx.data


def default_get_data(descriptor: ComponentDescriptor, ctx: ResolutionContext) -> Any:
    return ctx.copy_data(descriptor.key)


def default_transform(
    descriptor: ComponentDescriptor, result: Any, ctx: ResolutionContext
) -> None:
    ctx.parent.set(descriptor.key, result)


def _run_process(descriptor: ComponentDescriptor, data: Any, ctx: ResolutionContext) -> Any:
    if descriptor.process is None:
        return data
    if descriptor.maps_elements and isinstance(data, list):
        results = []
        for element in data:
            result = descriptor.process(element, ctx)
            if isinstance(result, Err):
                return result
            if result is not OMIT:
                results.append(result)
        return results
    return descriptor.process(data, ctx)


def _error_message(error: Exception) -> str:
    if isinstance(error, KeyError) and error.args:
        return f"missing field {error.args[0]!r}"
    return str(error) or type(error).__name__


def resolve_component(descriptor: ComponentDescriptor, ctx: ResolutionContext) -> Outcome:
    """Run one component against one entity.

    Args:
        descriptor: The component to apply
        ctx: Context of the entity being resolved

    Returns:
        SKIPPED, Ok or Err
    """
    key = descriptor.key
    try:
        if descriptor.trigger is not None:
            triggered = descriptor.trigger(ctx)
        else:
            triggered = default_trigger(descriptor, ctx)
        if not triggered:
            return SKIPPED

        if descriptor.get_data is not None:
            data = descriptor.get_data(ctx)
        else:
            data = default_get_data(descriptor, ctx)

        for required in descriptor.requires:
            if required not in ctx.data:
                raise MissingRequirementError(ctx.id, required, key)

        result = _run_process(descriptor, data, ctx)
        if isinstance(result, Err):
            return result
        if result is OMIT:
            return Ok(None, written=False)

        if descriptor.transform is not None:
            written = descriptor.transform(result, ctx)
        else:
            written = default_transform(descriptor, result, ctx)
        if isinstance(written, Err):
            return written
        return Ok(result)

    except ResolutionError as e:
        return Err.of(e.kind, str(e), component=key)
    except _DATA_ERRORS as e:
        return Err.of(
            ErrorKind.INVALID_DATA,
            f"{ctx.id} has invalid {key} data: {_error_message(e)}",
            component=key,
        )
