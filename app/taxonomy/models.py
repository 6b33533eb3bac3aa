import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Taxonomy:
    """Ordered category labels plus the prompts that teach them to the assistant.

    ``categories`` maps each label to its description and keeps file order;
    the default label is always the last entry.
    """

    categories: dict[str, str]
    default_label: str
    instructions_template: str = field(repr=False)
    question_template: str = field(repr=False)

    @property
    def labels(self) -> list[str]:
        return list(self.categories)

    @property
    def instructions(self) -> str:
        return self.instructions_template.format(
            category_descriptions=json.dumps(self.categories, indent=4),
        )

    @property
    def question(self) -> str:
        category_list = "[" + ", ".join(f"'{label}'" for label in self.labels) + "]"
        return self.question_template.format(
            category_list=category_list,
            default_label=self.default_label,
        )
