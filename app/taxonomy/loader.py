import json
from pathlib import Path

from app.taxonomy.exceptions import TaxonomyError
from app.taxonomy.models import Taxonomy

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_text(path: Path) -> str:
    """Read a prompt template file.

    Raises:
        TaxonomyError: if the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TaxonomyError(f"Failed to load prompt template: {exc}") from exc


def load_categories(path: Path | None = None) -> tuple[dict[str, str], str]:
    """Load the ordered category descriptions and the default label.

    The file is a JSON object with a ``categories`` mapping of label to
    description and an optional ``default_label`` (``UNKNOWN`` when absent).

    Args:
        path: Path to the categories file.
              Defaults to the bundled categories.json.

    Returns:
        The ordered ``{label: description}`` mapping, ending with the
        default label, and the default label itself.

    Raises:
        TaxonomyError: if the file cannot be read or has the wrong shape.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "categories.json"
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TaxonomyError(f"Failed to load categories: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TaxonomyError(f"Invalid JSON in categories file: {exc}") from exc

    if not isinstance(raw, dict):
        raise TaxonomyError("Categories file must contain a JSON object")
    categories = raw.get("categories")
    if not isinstance(categories, dict) or not categories:
        raise TaxonomyError("Categories file must define a non-empty 'categories' object")
    default_label = raw.get("default_label", "UNKNOWN")
    if not isinstance(default_label, str) or not default_label.strip():
        raise TaxonomyError("'default_label' must be a non-empty string")

    ordered: dict[str, str] = {}
    for label, description in categories.items():
        if not label.strip():
            raise TaxonomyError("Category labels must be non-empty")
        if label == default_label:
            continue
        ordered[label] = str(description)
    ordered[default_label] = str(categories.get(default_label, ""))
    return ordered, default_label


def load_taxonomy(
    categories_path: Path | None = None,
    instructions_path: Path | None = None,
    question_path: Path | None = None,
) -> Taxonomy:
    """Build a Taxonomy from the bundled prompt files or the given overrides."""
    categories, default_label = load_categories(categories_path)
    taxonomy = Taxonomy(
        categories=categories,
        default_label=default_label,
        instructions_template=load_text(
            instructions_path or _DEFAULT_PROMPT_DIR / "assistant_instructions.txt"
        ),
        question_template=load_text(
            question_path or _DEFAULT_PROMPT_DIR / "classification_question.txt"
        ),
    )
    try:
        _ = taxonomy.instructions, taxonomy.question
    except (KeyError, IndexError, ValueError) as exc:
        raise TaxonomyError(f"Invalid placeholder in prompt template: {exc}") from exc
    return taxonomy
