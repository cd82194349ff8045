"""Tests for the Stringman manager.

Loading, registration, lookup and builds through the public manager API.
"""

import dataclasses
import datetime
import logging
from pathlib import Path

import pytest

from stringman import Stringman, StringmanConfig
from stringman.core.statement import RawTemplate
from stringman.exceptions import (
    DuplicateStatementError,
    ImproperConfigurationError,
    MalformedTemplateError,
    MissingParametersError,
    ParameterNotFoundError,
    StatementNotFoundError,
    TemplateFileNotFoundError,
    UnsupportedTypeError,
)


def test_from_path_registers_all_matching_templates(manager: Stringman) -> None:
    assert manager.list_templates() == [
        "COUNTCITY",
        "DELETEALBUM",
        "DROPCITYTABLE",
        "INSERTALBUM",
        "INSERTCITY",
        "SELECTALBUMCOUNT",
        "SELECTCITYWITHINCLAUSE",
        "UPDATEALBUM",
    ]


def test_build_by_id(manager: Stringman) -> None:
    assert manager.build("UpdateAlbum", {"Score": 10, "Id": 1}) == "UPDATE album SET score=10 WHERE id=1"


def test_build_with_keyword_parameters(manager: Stringman) -> None:
    assert manager.build("updatealbum", {"Score": 10}, Id=2) == "UPDATE album SET score=10 WHERE id=2"
    assert manager.build("UPDATEALBUM", Score=3, Id=4) == "UPDATE album SET score=3 WHERE id=4"


def test_build_without_parameters(manager: Stringman) -> None:
    assert manager.build("CountCity") == "SELECT Count(*) FROM CITY"
    with pytest.raises(MissingParametersError):
        manager.build("InsertAlbum")


def test_build_repeated_placeholder(manager: Stringman) -> None:
    assert manager.build("SelectCityWithInClause", Age=20) == "SELECT * FROM CITY WHERE Age > 20 AND Age < 20"


def test_build_sql_file_template(manager: Stringman) -> None:
    assert manager.build("DeleteAlbum", Id=9) == "DELETE FROM album WHERE id = 9"


def test_build_unknown_id(manager: Stringman) -> None:
    with pytest.raises(StatementNotFoundError):
        manager.build("NoSuchStatement", {"A": 1})


def test_build_missing_parameter(manager: Stringman) -> None:
    with pytest.raises(ParameterNotFoundError) as exc_info:
        manager.build("InsertAlbum", Id=1)

    assert exc_info.value.name == "Score"


def test_add_template_and_find() -> None:
    manager = Stringman()
    template = manager.add_template("InsertCity", "INSERT INTO CITY(NAME) VALUES({Name})")

    assert manager.find("INSERTCITY") is template
    assert manager.has_template("insertcity")
    assert not manager.has_template("InsertTown")


def test_duplicate_registration_keeps_first() -> None:
    manager = Stringman()
    manager.add_template("UpdateAlbum", "UPDATE album SET score={Score} WHERE id={Id}")

    with pytest.raises(DuplicateStatementError):
        manager.add_template("updateALBUM", "UPDATE album SET score=0")

    assert manager.build("UpdateAlbum", Score=1, Id=2) == "UPDATE album SET score=1 WHERE id=2"


def test_malformed_template_is_not_registered() -> None:
    manager = Stringman()

    with pytest.raises(MalformedTemplateError):
        manager.add_template("Broken", "SELECT {Name")

    assert not manager.has_template("Broken")


def test_register_templates_counts() -> None:
    manager = Stringman()
    count = manager.register_templates([RawTemplate("A", "SELECT 1"), RawTemplate("B", "SELECT {X}")])

    assert count == 2
    assert manager.list_templates() == ["A", "B"]


def test_load_aborts_on_duplicate_ids(tmp_path: Path) -> None:
    (tmp_path / "string.a.xml").write_text("<query><text id='Same'>SELECT 1</text></query>")
    (tmp_path / "string.b.xml").write_text("<query><text id='SAME'>SELECT 2</text></query>")

    with pytest.raises(DuplicateStatementError):
        Stringman.from_path(tmp_path)


def test_load_missing_path(tmp_path: Path) -> None:
    with pytest.raises(TemplateFileNotFoundError):
        Stringman.from_path(tmp_path / "nowhere")


def test_load_without_path_is_a_configuration_error() -> None:
    with pytest.raises(ImproperConfigurationError):
        Stringman().load()


def test_from_config_without_path_loads_nothing() -> None:
    manager = Stringman.from_config(StringmanConfig())

    assert manager.list_templates() == []


def test_invalid_config_is_rejected() -> None:
    with pytest.raises(ImproperConfigurationError) as exc_info:
        Stringman(StringmanConfig(placeholder_style="pyformat"))

    assert "placeholder_style" in str(exc_info.value)


def test_numeric_placeholder_style() -> None:
    manager = Stringman(StringmanConfig(placeholder_style="numeric"))
    template = manager.add_template("UpdateAlbum", "UPDATE album SET score={Score} WHERE id={Id}")

    assert template.parameterized_text == "UPDATE album SET score=$1 WHERE id=$2"


@dataclasses.dataclass
class Album:
    id: int
    score: int


class City:
    def __init__(self) -> None:
        self.name = "Seoul"
        self.create_time = datetime.datetime(2018, 1, 2, 3, 4, 5)
        self._secret = object()


def test_build_from_dataclass() -> None:
    manager = Stringman()
    manager.add_template("UpdateAlbum", "UPDATE album SET score={Score} WHERE id={Id}")

    assert manager.build_from_object("UpdateAlbum", Album(id=1, score=99)) == "UPDATE album SET score=99 WHERE id=1"


def test_build_from_plain_object_ignores_private_attributes() -> None:
    manager = Stringman()
    manager.add_template("InsertCity", "INSERT INTO CITY(NAME,CREATE_TIME) VALUES({Name},{CreateTime})")

    assert (
        manager.build_from_object("InsertCity", City())
        == "INSERT INTO CITY(NAME,CREATE_TIME) VALUES('Seoul','2018-01-02 03:04:05')"
    )


def test_build_from_object_without_conversion() -> None:
    manager = Stringman(StringmanConfig(field_name_style="none"))
    manager.add_template("UpdateAlbum", "UPDATE album SET score={score} WHERE id={id}")

    assert manager.build_from_object("UpdateAlbum", Album(id=1, score=2)) == "UPDATE album SET score=2 WHERE id=1"


def test_build_from_mapping() -> None:
    manager = Stringman()
    manager.add_template("A", "SELECT {track_id}")

    assert manager.build_from_object("A", {"track_id": 5}) == "SELECT 5"


class SlottedAlbum:
    __slots__ = ("_cache", "id", "score")

    def __init__(self, id: int, score: int) -> None:  # noqa: A002
        self.id = id
        self.score = score
        self._cache = None


def test_build_from_slotted_object() -> None:
    manager = Stringman()
    manager.add_template("UpdateAlbum", "UPDATE album SET score={Score} WHERE id={Id}")

    assert manager.build_from_object("UpdateAlbum", SlottedAlbum(3, 7)) == "UPDATE album SET score=7 WHERE id=3"


def test_build_from_object_without_attributes() -> None:
    manager = Stringman()
    manager.add_template("A", "SELECT {Real}")

    with pytest.raises(UnsupportedTypeError, match="unsupported type int"):
        manager.build_from_object("A", 5)


def test_debug_logging_of_registration(caplog: pytest.LogCaptureFixture) -> None:
    manager = Stringman(StringmanConfig(debug=True))

    with caplog.at_level(logging.DEBUG, logger="stringman"):
        manager.add_template("CountCity", "SELECT Count(*) FROM CITY")

    assert any("CountCity" in record.getMessage() for record in caplog.records)


def test_context_manager_and_repr(manager: Stringman) -> None:
    with manager as entered:
        assert entered is manager
        assert "COUNTCITY" in repr(manager)


def test_load_logs_structured_event(template_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
    manager = Stringman()

    with caplog.at_level(logging.INFO, logger="stringman"):
        manager.load(template_dir, fileset="string*")

    events = [record for record in caplog.records if record.getMessage() == "templates registered"]
    assert len(events) == 1
    assert events[0].stringman_context == {"path": str(template_dir), "fileset": "string*", "count": 8}
