"""Accumulator for the outcome of a save or load operation."""

from typing import Dict, Set

NO_RESULT = "No result"
NO_ADDITIONAL_INFO = "-"


class ResultReport:
    """
    Collects successfully processed items and categorized diagnostics of one operation.

    Both collections are sets, so appending is idempotent and the rendered output is
    sorted and independent of the order in which items arrived.
    """

    def __init__(self, objective: str = "-"):
        self.objective = objective
        self.successful = False
        self.results: Set[str] = set()
        self.additional_info: Dict[str, Set[str]] = {}

    def append_result(self, line: str):
        """Add one successfully processed item."""
        self.results.add(str(line))

    def append_additional_info(self, category: str, line: str):
        """
        Add one line of information to the section ``category``.

        Args:
            category: Title of the section (e.g. "Project already exists")
            line: One line of information
        """
        self.additional_info.setdefault(category, set()).add(str(line))

    def clear(self):
        self.objective = "-"
        self.successful = False
        self.results.clear()
        self.additional_info.clear()

    def render(self) -> str:
        """Render the report as deterministic, human readable text."""
        status = "done" if self.successful else "fail"
        lines = [f"[{status}] {self.objective}", "", "RESULT:"]

        if self.results:
            lines.extend(f"\t{result}" for result in sorted(self.results))
        else:
            lines.append(f"\t{NO_RESULT}")

        lines.extend(["", "ADDITIONAL INFO:"])

        if self.additional_info:
            for category in sorted(self.additional_info):
                lines.append(f"{category}:")
                lines.extend(f"\t{info}" for info in sorted(self.additional_info[category]))
                lines.append("")
        else:
            lines.extend([f"\t{NO_ADDITIONAL_INFO}", ""])

        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
