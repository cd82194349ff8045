"""Unit tests for building SQL text from bound templates."""

import datetime
from collections import OrderedDict, defaultdict

import pytest

from stringman.core.builder import build, resolve_parameters
from stringman.core.normalizer import TemplateNormalizer
from stringman.core.statement import BoundTemplate
from stringman.exceptions import MissingParametersError, ParameterNotFoundError, UnsupportedTypeError
from stringman.typing import NullInt64


def _bind(text: str, statement_id: str = "Stmt") -> BoundTemplate:
    return TemplateNormalizer().normalize(statement_id, text)


def test_build_update_statement() -> None:
    template = _bind("UPDATE t SET s={Score} WHERE id={Id}")

    assert build(template, {"Score": "Hello", "Id": 1234}) == "UPDATE t SET s='Hello' WHERE id=1234"


def test_no_placeholders_round_trip() -> None:
    template = _bind("\n   SELECT Count(*) FROM CITY  \n")

    assert build(template, {}) == "SELECT Count(*) FROM CITY"
    assert build(template) == "SELECT Count(*) FROM CITY"


def test_unused_parameters_are_ignored() -> None:
    template = _bind("SELECT Count(*) FROM CITY")

    assert build(template, {"Extra": 1}) == "SELECT Count(*) FROM CITY"


def test_duplicate_names_resolve_to_same_value() -> None:
    assert build(_bind("{X} and {X}"), {"X": 5}) == "5 and 5"


def test_order_follows_template_not_parameters() -> None:
    template = _bind("VALUES({A}, {B}, {C})")
    parameters = OrderedDict([("C", 3), ("B", 2), ("A", 1)])

    assert build(template, parameters) == "VALUES(1, 2, 3)"


def test_mixed_value_types() -> None:
    template = _bind(
        "INSERT INTO CITY(NAME,AGE,IS_MAN,PERCENTAGE,CREATE_TIME) VALUES({Name},{Age},{IsMan},{Percentage},{CreateTime})"
    )
    sql = build(
        template,
        {
            "Name": "Seoul",
            "Age": 30,
            "IsMan": False,
            "Percentage": 16.72,
            "CreateTime": datetime.datetime(2018, 1, 2, 3, 4, 5),
        },
    )

    assert sql == (
        "INSERT INTO CITY(NAME,AGE,IS_MAN,PERCENTAGE,CREATE_TIME) "
        "VALUES('Seoul',30,false,16.720000,'2018-01-02 03:04:05')"
    )


def test_nullable_integer_is_quoted() -> None:
    assert build(_bind("SET a={A}, b={B}"), {"A": NullInt64(7), "B": NullInt64()}) == "SET a='7', b=null"


def test_empty_parameters_with_bindings() -> None:
    template = _bind("DELETE FROM ted_adult WHERE track_id = {trackId}", "DeleteTedAdult")

    with pytest.raises(MissingParametersError) as exc_info:
        build(template, {})

    assert exc_info.value.statement_id == "DeleteTedAdult"
    with pytest.raises(MissingParametersError):
        build(template, None)


def test_missing_parameter_fails_fast() -> None:
    template = _bind("SELECT {X} FROM t WHERE y={Y}")

    with pytest.raises(ParameterNotFoundError) as exc_info:
        build(template, {"X": 1})

    assert exc_info.value.name == "Y"


def test_mapping_with_default_factory_still_reports_missing() -> None:
    template = _bind("SELECT {X} WHERE y={Y}")
    parameters = defaultdict(int, {"X": 1})

    with pytest.raises(ParameterNotFoundError) as exc_info:
        build(template, parameters)

    assert exc_info.value.name == "Y"
    assert dict(parameters) == {"X": 1}


def test_first_missing_parameter_is_reported() -> None:
    template = _bind("SELECT {A}, {B}, {C}")

    with pytest.raises(ParameterNotFoundError) as exc_info:
        build(template, {"A": 1})

    assert exc_info.value.name == "B"


def test_parameter_names_are_case_sensitive() -> None:
    with pytest.raises(ParameterNotFoundError):
        build(_bind("SELECT {Name}"), {"name": "x"})


def test_unsupported_type_produces_no_text() -> None:
    with pytest.raises(UnsupportedTypeError):
        build(_bind("SELECT {A}, {B}"), {"A": 1, "B": object()})


def test_resolve_parameters_in_declared_order() -> None:
    template = _bind("{B} {A} {B}")

    assert resolve_parameters(template, {"A": 1, "B": 2}) == [2, 1, 2]
