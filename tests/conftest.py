from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from stringman import Stringman

here = Path(__file__).parent
root_path = here.parent

SAMPLE_XML = """
<?xml version="1.0" encoding="UTF-8" ?>
<query>
    <text id="DropCityTable">
        drop table if exists city
    </text>
    <text id="InsertAlbum">
        INSERT INTO album  ( id, score ) VALUES ({Id},{Score})
    </text>
    <text id="UpdateAlbum">
        UPDATE album SET score={Score} WHERE id={Id}
    </text>
    <text id="InsertCity">
        INSERT INTO CITY(NAME,AGE,IS_MAN,PERCENTAGE,CREATE_TIME) VALUES({Name},{Age},{IsMan},{Percentage},{CreateTime})
    </text>
    <text id="SelectCityWithInClause">
<![CDATA[
        SELECT * FROM CITY WHERE Age > {Age} AND Age < {Age}
]]>
    </text>
    <text id="CountCity">
        SELECT Count(*) FROM CITY
    </text>
</query>
"""

SAMPLE_SQL = """
-- name: SelectAlbumCount
SELECT COUNT(*) FROM album

-- name: DeleteAlbum
-- removes one album
DELETE FROM album WHERE id = {Id}
"""


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Directory with one XML and one SQL template file, plus a file the default fileset ignores."""
    (tmp_path / "string.sample.xml").write_text(SAMPLE_XML, encoding="utf-8")
    (tmp_path / "string.album.sql").write_text(SAMPLE_SQL, encoding="utf-8")
    (tmp_path / "other.xml").write_text("<query><text id='Ignored'>SELECT 1</text></query>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def manager(template_dir: Path) -> Stringman:
    return Stringman.from_path(template_dir, fileset="string*")


@pytest.fixture(autouse=True)
def restore_stringman_logger() -> Iterator[None]:
    """Undo handler, level and propagation changes made by ``configure_logging``."""
    logger = logging.getLogger("stringman")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
