"""Configuration for summary aggregation and rendering."""

from dataclasses import dataclass


@dataclass
class SummaryConfig:
    """Settings shared by the aggregator and the summary renderer."""

    # Width of the right-aligned count column in the overview
    count_width: int = 10

    # Padded width of "<kind-plural> <label>" inside the overview brackets
    label_width: int = 21

    # Indentation unit for the failures section
    indent: str = "  "

    # Reject events for identifiers that are not members of the plan
    strict_plan_membership: bool = False

    def overview_line(self, count: int, text: str) -> str:
        """Format one bracketed overview row."""
        return f"[{count:>{self.count_width}} {text:<{self.label_width}} ]"


# Global configuration instance
SUMMARY_CONFIG = SummaryConfig()
