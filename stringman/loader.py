"""Template file discovery and parsing.

Two source formats are understood:

XML files hold ``<text id="...">`` elements inside a root element; the
element body (CDATA allowed) is the template::

    <?xml version="1.0" encoding="UTF-8" ?>
    <query>
        <text id="UpdateAlbum">
            UPDATE album SET score={Score} WHERE id={Id}
        </text>
    </query>

SQL files hold aiosql-style named statements::

    -- name: UpdateAlbum
    UPDATE album SET score={Score} WHERE id={Id}

The loader only extracts ``(id, text)`` pairs; placeholder handling happens
in :mod:`stringman.core.normalizer`.
"""

import logging
import re
import time
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Union

from stringman.config import DEFAULT_FILESET
from stringman.core.statement import RawTemplate
from stringman.exceptions import TemplateFileNotFoundError, TemplateLoadingError
from stringman.utils.logging import get_logger, log_event

__all__ = ("TemplateLoader",)

logger = get_logger("loader")

TEXT_ELEMENT = "text"
ID_ATTRIBUTE = "id"
TRIM_CHARACTERS = "\r\t\n "
SUPPORTED_SUFFIXES = ("xml", "sql")

# Matches: -- name: statement_id
QUERY_NAME_PATTERN = re.compile(r"^\s*--\s*name\s*:\s*([\w-]+)\s*$", re.MULTILINE | re.IGNORECASE)


class TemplateLoader:
    """Reads template files and returns their raw templates.

    Example:
        ```python
        loader = TemplateLoader()
        for raw in loader.load("queries", fileset="string*.xml"):
            print(raw.id)
        ```

    Args:
        encoding: Text encoding for reading template files.
    """

    __slots__ = ("encoding",)

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def load(self, path: Union[str, Path], fileset: str = DEFAULT_FILESET) -> "list[RawTemplate]":
        """Load every template found at ``path``.

        Args:
            path: A directory searched with ``fileset``, or a single file.
            fileset: Glob pattern applied inside a directory.

        Raises:
            TemplateFileNotFoundError: If ``path`` does not exist.
            TemplateLoadingError: If a matched file cannot be read or parsed.

        Returns:
            Raw templates in file order, then document order.
        """
        start_time = time.perf_counter()
        path_obj = Path(path)
        if path_obj.is_dir():
            files = self._discover(path_obj, fileset)
        elif path_obj.is_file():
            files = [path_obj]
        else:
            raise TemplateFileNotFoundError(str(path))

        templates: list[RawTemplate] = []
        for file_path in files:
            templates.extend(self.load_file(file_path))

        log_event(
            logger,
            logging.DEBUG,
            "templates read",
            path=str(path),
            fileset=fileset,
            files=len(files),
            templates=len(templates),
            elapsed_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )
        return templates

    @staticmethod
    def _discover(dir_path: Path, fileset: str) -> "list[Path]":
        matches = sorted(dir_path.glob(fileset))
        log_event(logger, logging.DEBUG, "fileset matched", glob=str(dir_path / fileset), matches=len(matches))
        return [match for match in matches if match.is_file() and match.name.endswith(SUPPORTED_SUFFIXES)]

    def load_file(self, file_path: Union[str, Path]) -> "list[RawTemplate]":
        """Read and parse one template file.

        Raises:
            TemplateFileNotFoundError: If the file does not exist.
            TemplateLoadingError: If the file cannot be read or parsed.
        """
        path_str = str(file_path)
        try:
            content = Path(file_path).read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise TemplateFileNotFoundError(path_str) from e
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadingError(path_str, f"fail to read file: {e}") from e

        if path_str.endswith("sql"):
            return self.parse_sql_content(content, path_str)
        return self.parse_xml_content(content, path_str)

    @staticmethod
    def parse_xml_content(content: str, source: str = "<string>") -> "list[RawTemplate]":
        """Extract templates from an XML document.

        Every ``<text>`` element with an ``id`` attribute becomes one
        template. Its body is the character data of the element and of any
        nested elements, trimmed of surrounding whitespace.

        Args:
            content: XML document.
            source: Name used in error messages.

        Raises:
            TemplateLoadingError: If the document is not well-formed.

        Returns:
            Raw templates in document order.
        """
        try:
            root = ET.fromstring(content.lstrip())
        except ET.ParseError as e:
            raise TemplateLoadingError(source, f"invalid xml: {e}") from e

        templates = []
        for element in root.iter(TEXT_ELEMENT):
            statement_id = element.get(ID_ATTRIBUTE)
            if not statement_id:
                continue
            body = "".join(element.itertext()).strip(TRIM_CHARACTERS)
            templates.append(RawTemplate(statement_id, body, source))
        return templates

    @staticmethod
    def _strip_leading_comments(sql_text: str) -> str:
        """Remove leading comment lines from a SQL string."""
        lines = sql_text.strip().split("\n")
        for index, line in enumerate(lines):
            if line.strip() and not line.strip().startswith("--"):
                return "\n".join(lines[index:]).strip()
        return ""

    @staticmethod
    def parse_sql_content(content: str, source: str = "<string>") -> "list[RawTemplate]":
        """Extract templates from ``-- name:`` sections of a SQL file.

        Args:
            content: SQL file content.
            source: Name used in error messages.

        Raises:
            TemplateLoadingError: If no named statement is found or a name
                repeats within the file.

        Returns:
            Raw templates in file order.
        """
        name_matches = list(QUERY_NAME_PATTERN.finditer(content))
        if not name_matches:
            raise TemplateLoadingError(source, "No named SQL statements found (-- name: statement_id)")

        templates: list[RawTemplate] = []
        seen: set[str] = set()
        for index, match in enumerate(name_matches):
            statement_id = match.group(1).strip()
            end_pos = name_matches[index + 1].start() if index + 1 < len(name_matches) else len(content)
            body = TemplateLoader._strip_leading_comments(content[match.end() : end_pos])
            if not body:
                continue
            if statement_id in seen:
                raise TemplateLoadingError(source, f"Duplicate statement name: {statement_id}")
            seen.add(statement_id)
            templates.append(RawTemplate(statement_id, body, source))
        return templates
