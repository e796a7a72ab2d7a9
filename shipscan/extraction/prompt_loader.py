from pathlib import Path

from shipscan.extraction.exceptions import RemoteExtractionError

PROMPT_DIR = Path(__file__).parent / "prompts"
SYSTEM_PROMPT_FILE = "system_prompt.txt"
JSON_SCHEMA_FILE = "extraction_schema.json"


def load_system_prompt(path: Path | None = None) -> str:
    """Raw system instruction with a ``{json_schema}`` placeholder."""
    return _read(path or PROMPT_DIR / SYSTEM_PROMPT_FILE, "prompt template")


def load_json_schema(path: Path | None = None) -> str:
    """JSON shape the model must answer with."""
    return _read(path or PROMPT_DIR / JSON_SCHEMA_FILE, "JSON schema")


def render_system_prompt(
    prompt_path: Path | None = None,
    schema_path: Path | None = None,
) -> str:
    """System instruction with the JSON shape inlined.

    Args:
        prompt_path: Template file. Defaults to the bundled system_prompt.txt.
        schema_path: Shape file. Defaults to the bundled extraction_schema.json.

    Raises:
        RemoteExtractionError: if a file cannot be read or the template uses
            placeholders other than ``{json_schema}``.
    """
    template = load_system_prompt(prompt_path)
    schema = load_json_schema(schema_path).strip()
    try:
        return template.format(json_schema=schema)
    except (KeyError, IndexError, ValueError) as exc:
        raise RemoteExtractionError(f"Malformed prompt template: {exc}") from exc


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RemoteExtractionError(f"Failed to load {what}: {exc}") from exc
