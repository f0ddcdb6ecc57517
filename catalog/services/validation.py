"""Structural and value checks applied before any store access."""

import structlog

from catalog.core.errors import InvalidInputError
from catalog.schemas.tracking_plan import TrackingPlanCreate

logger = structlog.get_logger()

EVENT_TYPES = ("track", "identify", "alias", "screen", "page")
PROPERTY_TYPES = ("string", "number", "boolean")


def _reject(message: str, **fields) -> InvalidInputError:
    logger.info("validation_failed", reason=message, **fields)
    return InvalidInputError(message)


def _check_type(value: str, allowed: tuple[str, ...], label: str, field: str) -> None:
    if not value:
        raise _reject(f"{field} is required")
    if value not in allowed:
        raise _reject(
            f"{field} '{value}' is invalid. Must be one of: {', '.join(allowed)}",
            kind=label
        )


def validate_event(name: str, type: str) -> None:
    if not name:
        raise _reject("name is required")
    _check_type(type, EVENT_TYPES, "event", "type")


def validate_property(name: str, type: str) -> None:
    if not name:
        raise _reject("name is required")
    _check_type(type, PROPERTY_TYPES, "property", "type")


def validate_tracking_plan(spec: TrackingPlanCreate) -> None:
    """
    Reject a plan definition that can never be composed.

    Checks run in declaration order and stop at the first violation; nested
    violations carry the event/property index, e.g.
    ``events[1].properties[0].type 'currency' is invalid``.
    """
    if not spec.name:
        raise _reject("name is required")
    if not spec.events:
        raise _reject("events is required and cannot be empty")

    for i, event in enumerate(spec.events):
        if not event.name:
            raise _reject(f"events[{i}].name is required")
        _check_type(event.type, EVENT_TYPES, "event", f"events[{i}].type")

        for j, prop in enumerate(event.properties):
            if not prop.name:
                raise _reject(f"events[{i}].properties[{j}].name is required")
            _check_type(
                prop.type,
                PROPERTY_TYPES,
                "property",
                f"events[{i}].properties[{j}].type"
            )
