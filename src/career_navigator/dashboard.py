# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Terminal dashboard for a finished plan.
"""

import logging
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from career_navigator.metrics import DISPLAY_GAP_LIMIT, RoadmapProgress
from career_navigator.models import AdultPlan, CareerPlan, MinorPlan, Profile, Resource, RoadmapTask, UserIdentity

logger = logging.getLogger(__name__)

TABS = ("roadmap", "gaps", "market", "future")

COMMAND_HELP = "[t <day>] toggle task  [tab roadmap|gaps|market|future]  [pace] self-paced  [arch] architecture  [q] quit"

ARCHITECTURE_SECTIONS = [
    ("Agents", [
        "Guidance Agent / Quiz Generator: builds a curiosity quiz for users under 18.",
        "Career Predictor: turns quiz answers into recommended paths.",
        "Profile Analyzer: consolidates LinkedIn, GitHub and resume text into one profile.",
        "Market Insights Agent: researches the dream role with live search grounding.",
        "Gap Architect: maps the profile onto market benchmarks and writes the roadmap.",
    ]),
    ("Flow", [
        "Name -> Age -> (Quiz | Profile -> Dream Role) -> Analyzing -> Dashboard.",
        "Every agent answer is validated against a JSON Schema before it is shown.",
        "A failed agent call returns you to the previous step; nothing partial is kept.",
    ]),
    ("Feedback loop", [
        "Checking off roadmap tasks raises the mastery estimate of the gaps they mention.",
        "Tasks that name no gap still move every gap by the overall completion ratio.",
    ]),
]


def render_architecture() -> RenderableType:
    """Static description of the agent pipeline, shown as an overlay."""
    parts = []
    for title, lines in ARCHITECTURE_SECTIONS:
        body = Text("\n".join(f"• {line}" for line in lines))
        parts.append(Panel(body, title=title, title_align="left", border_style="blue"))
    return Group(*parts)


def _resource_lines(label: str, resources: List[Resource]) -> List[str]:
    if not resources:
        return []
    lines = [f"[bold]{label}[/bold]"]
    for res in resources:
        line = f"  - {escape(res.title)} ({escape(res.url)})"
        if res.description:
            line += f": {escape(res.description)}"
        lines.append(line)
    return lines


class DashboardView:
    """
    Owns the completion checklist for the plan on screen and renders the tabs.
    """
    def __init__(self, identity: UserIdentity, plan: CareerPlan, profile: Optional[Profile] = None,
                 gap_limit: int = DISPLAY_GAP_LIMIT):
        self.identity = identity
        self.profile = profile
        self.progress = RoadmapProgress(gap_limit=gap_limit)
        self.self_paced = False
        self.plan = plan
        self.load(plan)

    def load(self, plan: CareerPlan):
        """Shows a new plan; all checkmarks are cleared."""
        self.plan = plan
        match plan:
            case AdultPlan():
                self.progress.reset(plan)
                self.active_tab = "roadmap"
            case MinorPlan():
                self.progress.reset(None)
                self.active_tab = "future"

    def handle(self, command: str) -> Optional[str]:
        """
        Applies a dashboard command. Returns a feedback message, or None if unrecognised.
        """
        parts = command.strip().split()
        if not parts:
            return None

        match parts:
            case ["t" | "toggle", day] if isinstance(self.plan, AdultPlan):
                if not day.isdigit():
                    return f"'{day}' is not a day number."
                day_num = int(day)
                if day_num not in {task.day for task in self.plan.roadmap}:
                    return f"No task for day {day_num}."
                self.progress.toggle(day_num)
                state = "done" if self.progress.is_completed(day_num) else "open"
                return f"Day {day_num} marked {state}. Completion: {self.progress.completion()}%"
            case ["tab", name] if name in TABS:
                self.active_tab = name
                return f"Showing {name}."
            case ["pace"]:
                self.self_paced = not self.self_paced
                return "Self-paced modules." if self.self_paced else "30-day sprint."
            case _:
                return None

    def render(self) -> RenderableType:
        match self.plan:
            case MinorPlan():
                return self._render_minor(self.plan)
            case AdultPlan():
                return self._render_adult(self.plan)

    def _render_minor(self, plan: MinorPlan) -> RenderableType:
        header = Panel(
            f"Since you're {self.identity.age}, we've mapped out some paths you can start exploring today.",
            title=f"Hello, {escape(self.identity.name)}!", border_style="green",
        )
        paths = Table(show_lines=True, expand=True)
        paths.add_column("#", width=3)
        paths.add_column("Path")
        paths.add_column("Why it fits you")
        paths.add_column("Start these now")
        for i, path in enumerate(plan.result.recommended_paths, 1):
            paths.add_row(
                f"{i:02d}",
                f"[bold]{escape(path.title)}[/bold]\n{escape(path.description)}",
                f"[italic]{escape(path.rationale)}[/italic]",
                escape(", ".join(path.skills_to_start_now)),
            )
        advice = Panel(escape(plan.result.general_advice), title="General Guidance for Success", title_align="left")
        return Group(header, paths, advice, self._render_future(plan))

    def _render_adult(self, plan: AdultPlan) -> RenderableType:
        done = len(self.progress.completed)
        summary = Table.grid(expand=True, padding=(0, 2))
        summary.add_row(
            f"[dim]Target role[/dim]\n[bold]{escape(plan.dream_role)}[/bold]",
            f"[dim]Tasks done[/dim]\n[bold]{done} / {len(plan.roadmap)}[/bold] ({self.progress.completion()}%)",
            f"[dim]Longevity[/dim]\n[bold]{plan.future_outlook.longevity_score}/100[/bold]",
        )
        header = Panel(summary, title=f"Navigator Dashboard: {escape(self.identity.name)}", border_style="blue")

        tab_bar = Text("  ".join(
            f"[{tab.upper()}]" if tab == self.active_tab else tab for tab in TABS
        ), style="bold")

        body = {
            "roadmap": self._render_roadmap,
            "gaps": self._render_gaps,
            "market": self._render_market,
            "future": self._render_future,
        }[self.active_tab](plan)
        return Group(header, self._render_mastery(), tab_bar, body, Text(COMMAND_HELP, style="dim"))

    def _render_mastery(self) -> RenderableType:
        table = Table(title="Skill mastery", expand=True)
        table.add_column("Skill")
        table.add_column("Current", justify="right")
        table.add_column("Target", justify="right")
        table.add_column("")
        for item in self.progress.mastery():
            filled = int(round(item.current / item.scale_max * 20))
            table.add_row(escape(item.skill), f"{item.current:.1f}", f"{item.target:g}",
                          "[green]" + "█" * filled + "[/green]" + "░" * (20 - filled))
        return table

    def _task_label(self, index: int, task: RoadmapTask) -> str:
        return f"MODULE {index + 1}" if self.self_paced else f"DAY {task.day}"

    def _render_roadmap(self, plan: AdultPlan) -> RenderableType:
        panels = []
        for index, task in enumerate(plan.roadmap):
            completed = self.progress.is_completed(task.day)
            mark = "[green]✔[/green]" if completed else "☐"
            lines = [escape(task.description), ""]
            lines += _resource_lines("Learning", task.learning_sources)
            lines += _resource_lines("Mock tests", task.mock_tests)
            lines += _resource_lines("Mock interviews", task.mock_interviews)
            lines.append(f"[italic]Checkpoint: {escape(task.checkpoint)}[/italic]")
            panels.append(Panel(
                "\n".join(lines),
                title=f"{mark} {self._task_label(index, task)}: {escape(task.title)}",
                title_align="left",
                border_style="green" if completed else ("magenta" if self.self_paced else "blue"),
            ))
        if not panels:
            return Text("No roadmap tasks.", style="dim")
        return Group(*panels)

    def _render_gaps(self, plan: AdultPlan) -> RenderableType:
        table = Table(show_lines=True, expand=True)
        table.add_column("Skill")
        table.add_column("Importance", justify="right")
        table.add_column("Gap")
        table.add_column("Market")
        for gap in plan.gaps:
            table.add_row(escape(gap.skill), f"{gap.importance:g}/10", escape(gap.gap_description),
                          f"[italic]{escape(gap.market_demand)}[/italic]")
        return table

    def _render_market(self, plan: AdultPlan) -> RenderableType:
        return Panel(escape(plan.market_analysis), title="Market analysis", title_align="left")

    def _render_future(self, plan: CareerPlan) -> RenderableType:
        outlook = plan.future_outlook
        body = [
            escape(outlook.summary),
            "",
            f"[bold]Risk factor:[/bold] {outlook.risk_factor.value}   [bold]Longevity:[/bold] {outlook.longevity_score}/100",
            "",
            "[bold]Technological shifts[/bold]",
            *[f"  - {escape(shift)}" for shift in outlook.technological_shifts],
            "[bold]Emerging skills[/bold]",
            *[f"  - {escape(skill)}" for skill in outlook.emerging_skills],
        ]
        return Panel("\n".join(body), title="Future outlook", title_align="left")
