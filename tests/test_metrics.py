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

import unittest

from career_navigator.metrics import (
    RoadmapProgress, SkillMastery, completion_percentage, gap_mastery, skill_mastery, toggle_task,
)
from career_navigator.models import AdultPlan, FutureOutlook, RoadmapTask, SkillGap


def make_task(day, title="Study", description="Generic practice"):
    return RoadmapTask(day=day, title=title, description=description, checkpoint="Done")


def make_plan(gaps, roadmap):
    return AdultPlan(
        dream_role="Data Engineer",
        market_analysis="Hot market",
        gaps=gaps,
        roadmap=roadmap,
        future_outlook=FutureOutlook(summary="Bright"),
    )


class TestGapMastery(unittest.TestCase):
    def setUp(self):
        self.gap = SkillGap(skill="Kubernetes", importance=6, gap_description="", market_demand="")
        self.roadmap = [
            make_task(1, title="Intro to kubernetes"),
            make_task(2, description="Deploy a KUBERNETES cluster"),
            make_task(3, title="Resume polish"),
        ]

    def test_baseline_without_progress(self):
        result = gap_mastery(self.gap, self.roadmap, frozenset())
        self.assertEqual(result.current, 4.0)
        self.assertEqual(result.target, 10)
        self.assertEqual(result.scale_max, 10)

    def test_all_mentioning_tasks_complete(self):
        result = gap_mastery(self.gap, self.roadmap, frozenset({1, 2}))
        self.assertEqual(result.current, 10.0)

    def test_unrelated_completion_does_not_count_when_skill_is_mentioned(self):
        result = gap_mastery(self.gap, self.roadmap, frozenset({3}))
        self.assertEqual(result.current, 4.0)

    def test_partial_specific_progress(self):
        result = gap_mastery(self.gap, self.roadmap, frozenset({1}))
        self.assertEqual(result.current, 7.0)

    def test_falls_back_to_global_progress(self):
        gap = SkillGap(skill="Negotiation", importance=5, gap_description="", market_demand="")
        roadmap = [make_task(d) for d in range(1, 11)]
        result = gap_mastery(gap, roadmap, frozenset({1, 2}))
        self.assertEqual(result.current, 6.0)

    def test_rounds_to_one_decimal(self):
        gap = SkillGap(skill="Go", importance=7, gap_description="", market_demand="")
        roadmap = [make_task(1, title="Go basics"), make_task(2, title="Go tests"), make_task(3, title="Go APIs")]
        result = gap_mastery(gap, roadmap, frozenset({1}))
        # 3 + 7 / 3 = 5.333...
        self.assertEqual(result.current, 5.3)

    def test_empty_roadmap_stays_at_baseline(self):
        result = gap_mastery(self.gap, [], frozenset())
        self.assertEqual(result.current, 4.0)


class TestSkillMastery(unittest.TestCase):
    def test_only_first_six_gaps(self):
        gaps = [SkillGap(skill=f"Skill {i}", importance=5, gap_description="", market_demand="") for i in range(8)]
        plan = make_plan(gaps, [make_task(1)])
        result = skill_mastery(plan, frozenset())
        self.assertEqual([m.skill for m in result], [f"Skill {i}" for i in range(6)])

    def test_returns_display_tuples(self):
        plan = make_plan([SkillGap(skill="SQL", importance=3, gap_description="", market_demand="")], [])
        self.assertEqual(skill_mastery(plan, frozenset()), [SkillMastery(skill="SQL", current=7.0)])


class TestCompletion(unittest.TestCase):
    def test_zero_tasks_is_zero_percent(self):
        self.assertEqual(completion_percentage(make_plan([], []), frozenset()), 0)

    def test_rounds_half_up(self):
        plan = make_plan([], [make_task(d) for d in range(1, 9)])
        # 1 / 8 = 12.5%
        self.assertEqual(completion_percentage(plan, frozenset({1})), 13)

    def test_full_completion(self):
        plan = make_plan([], [make_task(1), make_task(2), make_task(3)])
        self.assertEqual(completion_percentage(plan, frozenset({1, 2, 3})), 100)


class TestToggleTask(unittest.TestCase):
    def test_adds_and_removes(self):
        self.assertEqual(toggle_task(frozenset(), 4), frozenset({4}))
        self.assertEqual(toggle_task(frozenset({4, 5}), 4), frozenset({5}))

    def test_double_toggle_is_identity(self):
        original = frozenset({1, 3})
        for day in (1, 2):
            self.assertEqual(toggle_task(toggle_task(original, day), day), original)


class TestRoadmapProgress(unittest.TestCase):
    def setUp(self):
        gaps = [SkillGap(skill="Python", importance=4, gap_description="", market_demand="")]
        self.plan = make_plan(gaps, [make_task(1, title="Python basics"), make_task(2)])
        self.progress = RoadmapProgress(self.plan)

    def test_metrics_follow_toggles(self):
        self.assertEqual(self.progress.completion(), 0)
        self.assertEqual(self.progress.mastery()[0].current, 6.0)

        self.progress.toggle(1)
        self.assertTrue(self.progress.is_completed(1))
        self.assertEqual(self.progress.completion(), 50)
        self.assertEqual(self.progress.mastery()[0].current, 10.0)

        self.progress.toggle(1)
        self.assertFalse(self.progress.is_completed(1))
        self.assertEqual(self.progress.mastery()[0].current, 6.0)

    def test_reset_clears_checkmarks(self):
        self.progress.toggle(2)
        other = make_plan([], [make_task(1)])
        self.progress.reset(other)
        self.assertEqual(self.progress.completed, frozenset())
        self.assertEqual(self.progress.mastery(), ())
        self.assertEqual(self.progress.completion(), 0)

    def test_plan_and_limit_are_read_only(self):
        self.assertEqual(self.progress.mastery()[0].current, 6.0)
        with self.assertRaises(AttributeError):
            self.progress.plan = make_plan([], [])
        with self.assertRaises(AttributeError):
            self.progress.gap_limit = 0
        self.assertEqual(self.progress.mastery()[0].current, 6.0)

    def test_no_plan(self):
        progress = RoadmapProgress()
        self.assertEqual(progress.mastery(), ())
        self.assertEqual(progress.completion(), 0)


if __name__ == '__main__':
    unittest.main()
