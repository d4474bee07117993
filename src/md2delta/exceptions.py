#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by md2delta.

The Delta compiler never fails on an unfamiliar node; it falls back to the
node's markdown source. Errors therefore come from the edges of the pipeline:
arguments and options, the markdown parser, and optional dependencies.

Exception Hierarchy
-------------------
- Md2DeltaError

  - ValidationError
    - InvalidOptionsError

  - ParsingError

  - DependencyError

"""

from typing import Any


class Md2DeltaError(Exception):
    """Root of the md2delta exception hierarchy.

    Parameters
    ----------
    message : str
        Error text shown to the user
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Md2DeltaError):
    """A caller passed an argument md2delta cannot use.

    ``parameter_name`` and ``parameter_value`` identify the offending
    argument when known.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A component received an options object of the wrong class.

    Raised, for example, when ``MarkdownRendererOptions`` is handed to the
    markdown parser or ``DeltaOptions`` is given a non-renderer
    ``serializer_options``.

    Parameters
    ----------
    component_name : str
        Parser, renderer or converter that rejected the options
    expected_type : type
        Options class the component accepts
    received_type : type
        Class of the object actually passed
    message : str, optional
        Overrides the generated message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        if message is None:
            message = (
                f"{component_name} expects {expected_type.__name__} options, "
                f"not {received_type.__name__}"
            )
        super().__init__(
            message,
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(Md2DeltaError):
    """Markdown input could not be turned into an AST.

    ``parsing_stage`` names the step that failed, e.g. ``"frontmatter"``.
    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


def _format_requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


class DependencyError(Md2DeltaError):
    """A required package is missing or installed at an unsupported version.

    Parameters
    ----------
    component_name : str
        Component that needs the packages
    missing_packages : list of (name, version_spec)
        Packages that could not be imported
    version_mismatches : list of (name, required, installed), optional
        Packages that imported but fail their version requirement
    message : str, optional
        Overrides the generated message, which ends with a pip command
    original_import_error : ImportError, optional
        The first import failure seen

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        version_mismatches = version_mismatches or []
        if message is None:
            lines = []
            if missing_packages:
                names = ", ".join(repr(_format_requirement(name, spec)) for name, spec in missing_packages)
                lines.append(f"{component_name} needs packages that are not installed: {names}")
            for name, required, installed in version_mismatches:
                lines.append(f"{component_name} needs {name}{required}, found {installed}")

            requirements = [_format_requirement(name, spec) for name, spec in missing_packages]
            requirements.extend(f"{name}{required}" for name, required, _ in version_mismatches)
            if requirements:
                lines.append("Install with: pip install --upgrade " + " ".join(f'"{req}"' for req in requirements))
            message = "\n".join(lines)

        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error
