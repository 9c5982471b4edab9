"""Shared constants and formatting helpers for the macro script grammar."""

import ntpath
from typing import Iterable, List, Optional, Union

Argument = Optional[Union[str, int]]

# Script grammar
SCRIPT_NAMESPACE = "akit"
DEFAULT_FRAME = "main_frame"
SCRIPT_PREFIX = (
    "namespace Tekla.Technology.Akit.UserScript {"
    "public class Script {"
    "public static void Run(Tekla.Technology.Akit.IScript akit) {"
)
SCRIPT_SUFFIX = "}}}"

# Temporary file naming
MAX_TEMP_FILES = 32
MACRO_FILE_FORMAT = "macro_{:02d}.cs"
EXT_CS = ".cs"
BYPRODUCT_EXTENSIONS = (".dll", ".pdb")

# Host settings
MACRO_DIRECTORY_OPTION = "XS_MACRO_DIRECTORY"
DRAWINGS_PREFIX = "..\\drawings\\"
PARENT_PREFIX = "..\\"
DEFAULT_POLL_INTERVAL = 0.1


def format_argument(value: Argument) -> str:
    """
    Render one call argument.

    Strings are quoted verbatim, None becomes an empty string literal,
    numbers stay bare.
    """
    if value is None:
        return '""'
    if isinstance(value, str):
        return f'"{value}"'
    return str(int(value))


def format_call(operation: str, args: Iterable[Argument] = ()) -> str:
    """Render a generic `akit.<Operation>(...);` line."""
    rendered = ", ".join(format_argument(a) for a in args)
    return f"{SCRIPT_NAMESPACE}.{operation}({rendered});\n"


def wrap_script(body: str) -> str:
    """Wrap accumulated command lines in the host's script envelope."""
    return SCRIPT_PREFIX + body + SCRIPT_SUFFIX


def has_extension(macro_name: str) -> bool:
    # Host paths use Windows separators regardless of where we run
    return bool(ntpath.splitext(macro_name)[1])


def byproduct_names(file_name: str) -> List[str]:
    """Return the script file name followed by its compile byproducts."""
    base = ntpath.splitext(file_name)[0]
    return [file_name] + [base + ext for ext in BYPRODUCT_EXTENSIONS]
