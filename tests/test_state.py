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

from career_navigator.config import MinorPlanDefaults
from career_navigator.errors import InputValidationError, InvalidTransitionError
from career_navigator.models import (
    AdultPlan, FutureOutlook, Profile, QuizQuestion, RecommendedPath, SourceBundle, Under18Result, UserIdentity,
)
from career_navigator.state import (
    AgeInput, AgeSubmitted, AnalysisRequest, Analyzing, AppState, ArchitectureToggled, CollaboratorFailed,
    Dashboard, DreamRole, NameInput, NameSubmitted, PlanArchitected, ProfileAnalyzed, ProfileInput,
    ProfileSubmitted, Quiz, QuizEvaluated, QuizReady, QuizSubmitted, RoleSubmitted, build_minor_plan,
    can_submit_quiz, parse_age, quiz_answers, reduce,
)

QUESTIONS = (
    QuizQuestion(question="Weekend plan?", options=["Build", "Paint", "Read", "Hike"]),
    QuizQuestion(question="Favourite class?", options=["Math", "Art", "Biology", "History"]),
)


def plan_stub():
    return AdultPlan(dream_role="SRE", market_analysis="", gaps=[], roadmap=[],
                     future_outlook=FutureOutlook(summary=""))


class TestAgeBranch(unittest.TestCase):
    def at_age_input(self):
        return reduce(AppState(), NameSubmitted(name="  Ada  "))

    def test_name_is_trimmed(self):
        self.assertEqual(self.at_age_input().stage, AgeInput(name="Ada"))

    def test_minors_go_to_quiz_generation(self):
        for age in (0, 12, 17):
            state = reduce(self.at_age_input(), AgeSubmitted(age=age))
            self.assertIsInstance(state.stage, Analyzing)
            self.assertEqual(state.stage.request, AnalysisRequest.QUIZ_GENERATION)
            self.assertEqual(state.stage.resume, AgeInput(name="Ada"))

    def test_adults_go_to_profile_input(self):
        for age in (18, 19, 65):
            state = reduce(self.at_age_input(), AgeSubmitted(age=age))
            self.assertEqual(state.stage, ProfileInput(UserIdentity(name="Ada", age=age)))

    def test_negative_age_rejected(self):
        with self.assertRaises(InputValidationError):
            reduce(self.at_age_input(), AgeSubmitted(age=-1))

    def test_empty_name_rejected(self):
        with self.assertRaises(InputValidationError):
            reduce(AppState(), NameSubmitted(name="   "))


class TestQuizPath(unittest.TestCase):
    def setUp(self):
        self.identity = UserIdentity(name="Sam", age=14)
        analyzing = Analyzing(self.identity, AnalysisRequest.QUIZ_GENERATION, resume=AgeInput(name="Sam"))
        self.state = reduce(AppState(stage=analyzing), QuizReady(questions=QUESTIONS))

    def test_quiz_ready(self):
        self.assertEqual(self.state.stage, Quiz(self.identity, QUESTIONS))

    def test_incomplete_quiz_rejected(self):
        with self.assertRaises(InputValidationError):
            reduce(self.state, QuizSubmitted(answers={0: "Build"}))

    def test_answer_must_be_an_option(self):
        with self.assertRaises(InputValidationError):
            reduce(self.state, QuizSubmitted(answers={0: "Build", 1: "Cooking"}))

    def test_complete_quiz_then_dashboard(self):
        state = reduce(self.state, QuizSubmitted(answers={0: "Build", 1: "Math"}))
        self.assertEqual(state.stage.request, AnalysisRequest.QUIZ_EVALUATION)

        result = Under18Result(recommended_paths=[RecommendedPath("Robotics", "Build robots", "You build", [])],
                               general_advice="Stay curious")
        plan = build_minor_plan(result, MinorPlanDefaults())
        state = reduce(state, QuizEvaluated(plan=plan))
        self.assertEqual(state.stage, Dashboard(self.identity, plan=plan))
        self.assertEqual(plan.market_analysis, "Stay curious")
        self.assertEqual(plan.dream_role, "Future Explorer")

    def test_evaluation_failure_returns_to_age_input(self):
        state = reduce(self.state, QuizSubmitted(answers={0: "Build", 1: "Math"}))
        state = reduce(state, CollaboratorFailed(reason="boom"))
        self.assertEqual(state.stage, AgeInput(name="Sam"))


class TestAdultPath(unittest.TestCase):
    def setUp(self):
        self.identity = UserIdentity(name="Ada", age=30)
        self.state = AppState(stage=ProfileInput(self.identity))

    def test_profile_requires_a_source(self):
        with self.assertRaises(InputValidationError):
            reduce(self.state, ProfileSubmitted(sources=SourceBundle(linkedin_text="  ")))

    def test_profile_merged_with_identity(self):
        state = reduce(self.state, ProfileSubmitted(sources=SourceBundle(resume_text="CV")))
        returned = Profile(name="Someone Else", current_title="Dev", age=99)
        state = reduce(state, ProfileAnalyzed(profile=returned))
        self.assertIsInstance(state.stage, DreamRole)
        self.assertEqual(state.stage.profile.name, "Ada")
        self.assertEqual(state.stage.profile.age, 30)
        self.assertEqual(state.stage.profile.current_title, "Dev")

    def test_profile_failure_returns_to_profile_input(self):
        state = reduce(self.state, ProfileSubmitted(sources=SourceBundle(github_info="repos")))
        state = reduce(state, CollaboratorFailed())
        self.assertEqual(state.stage, ProfileInput(self.identity))

    def test_role_to_dashboard(self):
        profile = Profile(name="Ada", current_title="Dev", age=30)
        state = AppState(stage=DreamRole(self.identity, profile))
        with self.assertRaises(InputValidationError):
            reduce(state, RoleSubmitted(role=""))

        state = reduce(state, RoleSubmitted(role="SRE"))
        self.assertEqual(state.stage.request, AnalysisRequest.PLAN_ARCHITECTURE)

        plan = plan_stub()
        done = reduce(state, PlanArchitected(plan=plan))
        self.assertEqual(done.stage, Dashboard(self.identity, plan=plan, profile=profile))

        failed = reduce(state, CollaboratorFailed())
        self.assertEqual(failed.stage, DreamRole(self.identity, profile))


class TestTransitions(unittest.TestCase):
    def test_submissions_rejected_while_analyzing(self):
        identity = UserIdentity(name="Ada", age=30)
        state = AppState(stage=Analyzing(identity, AnalysisRequest.PROFILE_ANALYSIS, resume=ProfileInput(identity)))
        with self.assertRaises(InvalidTransitionError):
            reduce(state, ProfileSubmitted(sources=SourceBundle(resume_text="again")))

    def test_result_for_other_request_rejected(self):
        identity = UserIdentity(name="Ada", age=30)
        state = AppState(stage=Analyzing(identity, AnalysisRequest.PROFILE_ANALYSIS, resume=ProfileInput(identity)))
        with self.assertRaises(InvalidTransitionError):
            reduce(state, PlanArchitected(plan=plan_stub()))

    def test_failure_outside_analyzing_rejected(self):
        with self.assertRaises(InvalidTransitionError):
            reduce(AppState(), CollaboratorFailed())

    def test_architecture_toggle_keeps_stage(self):
        state = reduce(AppState(), ArchitectureToggled())
        self.assertTrue(state.show_architecture)
        self.assertEqual(state.stage, NameInput())
        self.assertFalse(reduce(state, ArchitectureToggled()).show_architecture)


class TestPreconditions(unittest.TestCase):
    def test_parse_age(self):
        self.assertEqual(parse_age(" 18 "), 18)
        self.assertIsNone(parse_age("eighteen"))
        self.assertIsNone(parse_age("-3"))
        self.assertIsNone(parse_age(""))

    def test_quiz_needs_every_answer(self):
        self.assertFalse(can_submit_quiz(QUESTIONS, {0: "Build"}))
        self.assertFalse(can_submit_quiz((), {}))
        self.assertTrue(can_submit_quiz(QUESTIONS, {0: "Build", 1: "Art"}))

    def test_quiz_answers_pairs_question_text(self):
        answers = quiz_answers(QUESTIONS, {0: "Hike", 1: "History"})
        self.assertEqual([(a.question, a.answer) for a in answers],
                         [("Weekend plan?", "Hike"), ("Favourite class?", "History")])


if __name__ == '__main__':
    unittest.main()
