"""Automated checks to highlight catalog and progression issues."""

from __future__ import annotations

from dataclasses import dataclass

from ..app import BriefApp
from ..domain.cards import CATEGORY_ORDER, Difficulty
from ..domain.levels import threshold


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(app: BriefApp) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    grouped = app.cards.catalog.grouped()

    for category in CATEGORY_ORDER:
        cards = grouped[category]
        if not cards:
            issues.append(
                ChecklistIssue("error", f"Category {category.value} has no cards; briefs cannot be completed.")
            )
        elif len(cards) == 1:
            issues.append(
                ChecklistIssue("warning", f"Category {category.value} has a single card; rerolls cannot change it.")
            )
        else:
            missing = {d for d in Difficulty} - {card.difficulty for card in cards}
            if missing:
                names = ", ".join(sorted(d.value for d in missing))
                issues.append(
                    ChecklistIssue("info", f"Category {category.value} has no {names} cards.")
                )

    if not app.badges.catalog.all():
        issues.append(ChecklistIssue("warning", "No badges registered."))

    progress = app.config.progress
    if progress.cancel_penalty > threshold(3):
        issues.append(
            ChecklistIssue(
                "warning",
                f"Cancel penalty {progress.cancel_penalty} exceeds the points needed for level 3.",
            )
        )
    if progress.design_points <= 0:
        issues.append(ChecklistIssue("warning", "Submitting a design awards no points."))

    return issues
