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
Derived roadmap metrics: per-gap skill mastery and overall completion.

Mastery heuristic for a gap with importance I:
  baseline = 10 - I
  progress = share of completed tasks that mention the skill, or the
             global completion ratio when no task mentions it
  current  = baseline + I * progress
so mastery moves from the baseline toward 10 as relevant tasks are checked off.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Tuple

from career_navigator.models import AdultPlan, RoadmapTask, SkillGap

logger = logging.getLogger(__name__)

MASTERY_SCALE = 10
DISPLAY_GAP_LIMIT = 6


@dataclass(frozen=True)
class SkillMastery:
    """One axis of the mastery chart."""
    skill: str
    current: float
    target: float = MASTERY_SCALE
    scale_max: float = MASTERY_SCALE


def _round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _mentions(task: RoadmapTask, skill: str) -> bool:
    needle = skill.lower()
    return needle in task.title.lower() or needle in task.description.lower()


def gap_mastery(gap: SkillGap, roadmap: Iterable[RoadmapTask], completed: FrozenSet[int]) -> SkillMastery:
    tasks = list(roadmap)
    baseline = MASTERY_SCALE - gap.importance

    matched = 0
    matched_completed = 0
    for task in tasks:
        if _mentions(task, gap.skill):
            matched += 1
            if task.day in completed:
                matched_completed += 1

    if matched > 0:
        progress = matched_completed / matched
    else:
        progress = len(completed) / max(1, len(tasks))

    current = _round_half_up(baseline + gap.importance * progress, 1)
    return SkillMastery(skill=gap.skill, current=current)


def skill_mastery(plan: AdultPlan, completed: FrozenSet[int], limit: int = DISPLAY_GAP_LIMIT) -> List[SkillMastery]:
    """Mastery for the first `limit` gaps of the plan."""
    return [gap_mastery(gap, plan.roadmap, completed) for gap in plan.gaps[:limit]]


def completion_percentage(plan: AdultPlan, completed: FrozenSet[int]) -> int:
    return int(_round_half_up(100 * len(completed) / max(1, len(plan.roadmap))))


def toggle_task(completed: FrozenSet[int], day: int) -> FrozenSet[int]:
    """Flips membership of `day`."""
    if day in completed:
        return completed - {day}
    return completed | {day}


class RoadmapProgress:
    """
    Completion checklist for the plan shown on the dashboard.
    Metrics are recomputed from the immutable completed set and memoized per set.
    Plan and gap limit are read-only; `reset` swaps the plan and clears the memo.
    """
    def __init__(self, plan: Optional[AdultPlan] = None, gap_limit: int = DISPLAY_GAP_LIMIT):
        self._gap_limit = gap_limit
        self._plan = plan
        self.completed: FrozenSet[int] = frozenset()
        self._metrics = lru_cache(maxsize=32)(self._compute)

    @property
    def plan(self) -> Optional[AdultPlan]:
        return self._plan

    @property
    def gap_limit(self) -> int:
        return self._gap_limit

    def reset(self, plan: Optional[AdultPlan]):
        """Loads a new plan and clears every checkmark."""
        self._plan = plan
        self.completed = frozenset()
        self._metrics.cache_clear()

    def toggle(self, day: int) -> FrozenSet[int]:
        self.completed = toggle_task(self.completed, day)
        logger.debug(f"Toggled day {day}; {len(self.completed)} task(s) complete")
        return self.completed

    def is_completed(self, day: int) -> bool:
        return day in self.completed

    def _compute(self, completed: FrozenSet[int]) -> Tuple[Tuple[SkillMastery, ...], int]:
        if self.plan is None:
            return (), 0
        return (
            tuple(skill_mastery(self.plan, completed, self.gap_limit)),
            completion_percentage(self.plan, completed),
        )

    def mastery(self) -> Tuple[SkillMastery, ...]:
        return self._metrics(self.completed)[0]

    def completion(self) -> int:
        return self._metrics(self.completed)[1]
