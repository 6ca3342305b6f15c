"""Variable validator tests."""

import math

import pytest

from template_generator.schemas.generation import ErrorType
from template_generator.schemas.template import VariableSpec
from template_generator.services.variable_validator import check_value, validate_variables


def _spec(**kwargs) -> VariableSpec:
    return VariableSpec.model_validate(kwargs)


def test_all_present_and_valid():
    specs = [_spec(name="image", required=True), _spec(name="replicas", type="number")]
    report = validate_variables(specs, {"image": "nginx", "replicas": 3})
    assert report.is_valid is True
    assert report.errors == []


def test_missing_required_is_single_aggregated_error():
    specs = [
        _spec(name="image", required=True),
        _spec(name="tag", required=True),
        _spec(name="debug", type="boolean"),
    ]
    report = validate_variables(specs, {"debug": "yes"})

    assert report.is_valid is False
    types = [e.type for e in report.errors]
    assert types.count(ErrorType.MISSING_VARIABLES) == 1
    assert types.count(ErrorType.INVALID_VARIABLE) == 1
    missing = next(e for e in report.errors if e.type == ErrorType.MISSING_VARIABLES)
    assert missing.details == ["image", "tag"]
    invalid = next(e for e in report.errors if e.type == ErrorType.INVALID_VARIABLE)
    assert invalid.details["variable"] == "debug"


def test_default_does_not_satisfy_required():
    specs = [_spec(name="tag", required=True, defaultValue="latest")]
    report = validate_variables(specs, {})
    assert report.is_valid is False
    assert report.errors[0].details == ["tag"]


def test_every_invalid_variable_is_reported():
    specs = [
        _spec(name="a", type="number"),
        _spec(name="b", type="array"),
        _spec(name="c", type="object"),
    ]
    report = validate_variables(specs, {"a": "1", "b": {"x": 1}, "c": [1]})
    assert [e.details["variable"] for e in report.errors] == ["a", "b", "c"]


def test_port_below_minimum():
    specs = [_spec(name="port", type="number", validation={"minimum": 1024, "maximum": 65535})]
    report = validate_variables(specs, {"port": 80})
    assert report.is_valid is False
    assert report.errors[0].type == ErrorType.INVALID_VARIABLE
    assert report.errors[0].details["variable"] == "port"


def test_bound_messages_use_plain_numbers():
    spec = _spec(name="n", type="number", validation={"minimum": 0.5, "maximum": 1000000})
    assert check_value(spec, 2000000) == "must be <= 1000000"
    assert check_value(spec, 0.25) == "must be >= 0.5"


def test_undeclared_variables_are_ignored():
    report = validate_variables([_spec(name="image")], {"image": "nginx", "extra": object()})
    assert report.is_valid is True


@pytest.mark.parametrize(
    "spec, value",
    [
        ({"name": "v", "type": "string"}, "text"),
        ({"name": "v", "type": "number"}, 1.5),
        ({"name": "v", "type": "number"}, 0),
        ({"name": "v", "type": "boolean"}, False),
        ({"name": "v", "type": "array"}, []),
        ({"name": "v", "type": "object"}, {}),
        ({"name": "v", "validation": {"pattern": "[a-z]+"}}, "abc"),
        ({"name": "v", "validation": {"minLength": 2, "maxLength": 3}}, "abc"),
        ({"name": "v", "validation": {"enum": ["dev", "prod"]}}, "prod"),
        ({"name": "v", "type": "number", "validation": {"minimum": 1, "maximum": 2}}, 2),
    ],
)
def test_accepted_values(spec, value):
    assert check_value(_spec(**spec), value) is None


@pytest.mark.parametrize(
    "spec, value",
    [
        ({"name": "v", "type": "string"}, 5),
        ({"name": "v", "type": "string"}, None),
        ({"name": "v", "type": "number"}, True),
        ({"name": "v", "type": "number"}, "8080"),
        ({"name": "v", "type": "number"}, math.nan),
        ({"name": "v", "type": "boolean"}, 1),
        ({"name": "v", "type": "boolean"}, "true"),
        ({"name": "v", "type": "array"}, "a,b"),
        ({"name": "v", "type": "object"}, None),
        ({"name": "v", "type": "object"}, ["k"]),
        ({"name": "v", "validation": {"pattern": "[a-z]+"}}, "abc1"),
        ({"name": "v", "validation": {"minLength": 4}}, "abc"),
        ({"name": "v", "validation": {"maxLength": 2}}, "abc"),
        ({"name": "v", "validation": {"enum": ["dev", "prod"]}}, "test"),
        ({"name": "v", "type": "number", "validation": {"maximum": 10}}, 10.5),
    ],
)
def test_rejected_values(spec, value):
    assert check_value(_spec(**spec), value) is not None


def test_pattern_must_match_whole_value():
    spec = _spec(name="tag", validation={"pattern": r"\d+"})
    assert check_value(spec, "1.21") is not None
    assert check_value(spec, "121") is None


def test_default_value_must_match_type():
    with pytest.raises(ValueError):
        _spec(name="port", type="number", defaultValue="80")


def test_invalid_pattern_rejected_at_declaration():
    with pytest.raises(ValueError):
        _spec(name="v", validation={"pattern": "("})
