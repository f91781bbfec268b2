"""Local checks for the database upload wizard, run before anything is sent."""
from typing import Literal, Optional, Sequence

from sqlassist.errors import UploadValidationError

Mode = Literal["full", "schema_data", "zip"]
Engine = Literal["postgres", "mysql"]

# mode -> (required file count, extension, label shown in the mode picker)
MODES = {
    "full": (1, "sql", "Full .sql (schema + data)"),
    "schema_data": (2, "sql", "Schema + data (2 .sql)"),
    "zip": (1, "zip", "ZIP with .sql scripts"),
}

MODE_HINTS = {
    "full": "Upload a single .sql file with schema + data (a complete dump).",
    "schema_data": "Select 2 .sql files: one with the schema and one with the data. They run in order.",
    "zip": "Upload a .zip containing .sql scripts. Other files are ignored.",
}

ENGINE_LABELS = {"postgres": "PostgreSQL", "mysql": "MySQL"}


def normalize_engine(value: Optional[str]) -> Engine:
    """Anything other than "mysql" means PostgreSQL"""
    return "mysql" if value == "mysql" else "postgres"


def accepted_extension(mode: Mode) -> str:
    return MODES[mode][1]


def allows_multiple(mode: Mode) -> bool:
    return MODES[mode][0] > 1


def validate_upload(mode: str, filenames: Sequence[str]) -> None:
    """Raise UploadValidationError unless `filenames` fits the chosen mode"""
    if mode not in MODES:
        raise UploadValidationError(f"Unknown upload mode: {mode}")

    if not filenames:
        raise UploadValidationError("Select file(s).")

    count, extension, _ = MODES[mode]
    if len(filenames) != count:
        if mode == "full":
            raise UploadValidationError("FULL mode requires exactly 1 .sql file.")
        if mode == "schema_data":
            raise UploadValidationError("Schema + data mode requires 2 .sql files.")
        raise UploadValidationError("ZIP mode requires 1 .zip file.")

    for name in filenames:
        if not name.lower().endswith(f".{extension}"):
            raise UploadValidationError(f"'{name}' is not a .{extension} file.")
