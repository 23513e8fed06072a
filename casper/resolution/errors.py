"""Exceptions raised while configuring and running the resolution engine.

ConfigurationError and its subclasses are programming errors in the set of
registered components: they are raised before a run starts and are fatal.

ResolutionError and its subclasses describe a problem with one record. Hooks
raise them; the resolver turns them into ``Err`` outcomes and the run carries
on with the remaining entities.
"""

from ..core.models import ErrorKind


class ConfigurationError(Exception):
    """Raised when the registered components cannot be ordered or are invalid."""


class ComponentCycleError(ConfigurationError):
    """Raised when component dependencies form a cycle."""

    def __init__(self, message: str, components: list[str]):
        super().__init__(message)
        self.components = components


class ResolutionError(Exception):
    """A record could not be resolved by a component."""

    kind = ErrorKind.INVALID_DATA


class MissingRequirementError(ResolutionError):
    """A record has a component but lacks a field that component requires."""

    kind = ErrorKind.MISSING_REQUIREMENT

    def __init__(self, entity_id: str, field: str, component: str):
        super().__init__(
            f'{entity_id} does not contain "{field}", which is a requirement for "{component}"'
        )
        self.entity_id = entity_id
        self.field = field
        self.component = component


class UndefinedReferenceError(ResolutionError):
    """A reference points at no entity, or at one lacking the expected component."""

    kind = ErrorKind.UNDEFINED_REFERENCE


class UnknownComponentError(ResolutionError):
    """A record carries a root field that no registered component handles."""

    kind = ErrorKind.UNKNOWN_COMPONENT
