from typing import Any, Optional

__all__ = (
    "DuplicateStatementError",
    "ImproperConfigurationError",
    "MalformedTemplateError",
    "MissingParametersError",
    "ParameterError",
    "ParameterNotFoundError",
    "StatementNotFoundError",
    "StringmanError",
    "TemplateError",
    "TemplateFileNotFoundError",
    "TemplateLoadingError",
    "UnsupportedTypeError",
)


class StringmanError(Exception):
    """Base exception class from which all stringman exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``StringmanError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(StringmanError):
    """Improper Configuration error.

    Raised when a :class:`~stringman.config.StringmanConfig` fails validation.
    """


# -- Template Errors --
class TemplateError(StringmanError):
    """Base class for template definition errors."""


class MalformedTemplateError(TemplateError):
    """Placeholder syntax is invalid or the template is too short."""

    template: Optional[str]

    def __init__(self, message: str, template: Optional[str] = None) -> None:
        """Initialize with the offending template text."""
        detail_message = message
        if template is not None:
            detail_message = f"{message} : {template}"
        super().__init__(detail=detail_message)
        self.template = template


class TemplateLoadingError(TemplateError):
    """Issues reading or parsing a template source file."""

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues loading template file"
        super().__init__(detail=f"{message} [path={path}]")
        self.path = path


class TemplateFileNotFoundError(TemplateError):
    """A template file or directory does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(detail=f"Template file not found: {path}")
        self.path = path


# -- Registry Errors --
class DuplicateStatementError(StringmanError):
    """A second template was registered under an existing id."""

    def __init__(self, statement_id: str) -> None:
        super().__init__(detail=f"duplicated user statement id : [{statement_id}]")
        self.statement_id = statement_id


class StatementNotFoundError(StringmanError):
    """No template is registered under the requested id."""

    def __init__(self, statement_id: str) -> None:
        super().__init__(detail=f"not found text statement for id : {statement_id}")
        self.statement_id = statement_id


# -- Parameter Errors --
class ParameterError(StringmanError):
    """Base class for parameter-related errors."""


class MissingParametersError(ParameterError):
    """A template with bindings was built without any parameters."""

    def __init__(self, statement_id: Optional[str] = None) -> None:
        message = "need parameter for completing text"
        if statement_id:
            message = f"{message} [id={statement_id}]"
        super().__init__(detail=message)
        self.statement_id = statement_id


class ParameterNotFoundError(ParameterError):
    """A named binding has no entry in the supplied parameters."""

    def __init__(self, name: str) -> None:
        super().__init__(detail=f"not found param {name}")
        self.name = name


class UnsupportedTypeError(ParameterError):
    """A parameter value has no SQL literal formatting rule."""

    def __init__(self, type_name: str) -> None:
        super().__init__(detail=f"unsupported type {type_name}")
        self.type_name = type_name
