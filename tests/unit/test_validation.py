import pytest

from catalog.core.errors import InvalidInputError
from catalog.schemas.tracking_plan import TrackingPlanCreate
from catalog.services.validation import validate_event, validate_property, validate_tracking_plan


def make_plan(**overrides) -> TrackingPlanCreate:
    body = {
        "name": "Checkout",
        "description": "checkout funnel",
        "events": [
            {
                "name": "purchase",
                "type": "track",
                "properties": [{"name": "amount", "type": "number", "required": True}],
            }
        ],
    }
    body.update(overrides)
    return TrackingPlanCreate.model_validate(body)


def test_valid_plan_passes():
    validate_tracking_plan(make_plan())


def test_plan_name_required():
    with pytest.raises(InvalidInputError, match="name is required"):
        validate_tracking_plan(make_plan(name="   "))


def test_at_least_one_event_required():
    with pytest.raises(InvalidInputError, match="events is required"):
        validate_tracking_plan(make_plan(events=[]))


def test_event_name_required_with_index():
    plan = make_plan(events=[{"name": "purchase"}, {"name": ""}])

    with pytest.raises(InvalidInputError) as exc_info:
        validate_tracking_plan(plan)

    assert exc_info.value.message == "events[1].name is required"


def test_invalid_property_type_reports_both_indexes():
    plan = make_plan(events=[
        {"name": "purchase", "properties": [{"name": "amount", "type": "number"}]},
        {"name": "refund", "properties": [
            {"name": "reason", "type": "string"},
            {"name": "price", "type": "currency"},
        ]},
    ])

    with pytest.raises(InvalidInputError) as exc_info:
        validate_tracking_plan(plan)

    message = exc_info.value.message
    assert message.startswith("events[1].properties[1].type 'currency' is invalid")
    assert "string, number, boolean" in message


def test_property_name_and_type_required():
    with pytest.raises(InvalidInputError, match=r"events\[0\].properties\[0\].name is required"):
        validate_tracking_plan(make_plan(events=[{"name": "a", "properties": [{"type": "string"}]}]))

    with pytest.raises(InvalidInputError, match=r"events\[0\].properties\[0\].type is required"):
        validate_tracking_plan(make_plan(events=[{"name": "a", "properties": [{"name": "p"}]}]))


def test_plan_event_type_defaults_to_track():
    plan = make_plan(events=[{"name": "purchase"}])

    validate_tracking_plan(plan)
    assert plan.events[0].type == "track"


def test_plan_event_type_must_be_known():
    with pytest.raises(InvalidInputError, match=r"events\[0\].type 'click' is invalid"):
        validate_tracking_plan(make_plan(events=[{"name": "purchase", "type": "click"}]))


def test_additional_properties_accepts_camel_case():
    plan = make_plan(events=[{"name": "purchase", "additionalProperties": True}])

    assert plan.events[0].additional_properties is True


@pytest.mark.parametrize("event_type", ["track", "identify", "alias", "screen", "page"])
def test_event_types_accepted(event_type):
    validate_event("signup", event_type)


def test_event_rejects_unknown_type_and_missing_fields():
    with pytest.raises(InvalidInputError, match="name is required"):
        validate_event("", "track")
    with pytest.raises(InvalidInputError, match="type is required"):
        validate_event("signup", "")
    with pytest.raises(InvalidInputError, match="type 'click' is invalid"):
        validate_event("signup", "click")


def test_property_rejects_unknown_type():
    validate_property("amount", "number")

    with pytest.raises(InvalidInputError, match="type 'currency' is invalid"):
        validate_property("amount", "currency")


def test_blank_descriptions_are_stripped_to_empty():
    plan = make_plan(description="  ", events=[
        {"name": "purchase", "description": "\t", "properties": [{"name": "amount", "type": "number", "description": " "}]}
    ])

    assert plan.description == ""
    assert plan.events[0].description == ""
    assert plan.events[0].properties[0].description == ""
