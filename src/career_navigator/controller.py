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
Drives the onboarding flow: feeds user submissions through the reducer and
runs the agent call each transition needs.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from career_navigator.config import MinorPlanDefaults
from career_navigator.models import AdultPlan, Profile, QuizAnswer, QuizQuestion, SourceBundle, Under18Result
from career_navigator.session_log import SessionLog
from career_navigator.state import (
    AgeSubmitted, Analyzing, AppState, ArchitectureToggled, CollaboratorFailed, Event,
    NameSubmitted, PlanArchitected, ProfileAnalyzed, ProfileSubmitted, Quiz, QuizEvaluated,
    QuizReady, QuizSubmitted, RoleSubmitted, Stage, build_minor_plan, quiz_answers, reduce,
)

logger = logging.getLogger(__name__)


class AgentClient(Protocol):
    async def generate_career_quiz(self, age: int) -> List[QuizQuestion]: ...

    async def evaluate_quiz_results(self, age: int, answers: List[QuizAnswer]) -> Under18Result: ...

    async def analyze_profile(self, sources: SourceBundle) -> Profile: ...

    async def architect_career_plan(self, profile: Profile, dream_role: str) -> AdultPlan: ...


class CareerNavigator:
    """
    Owns the application state, the session log and the agent client.
    At most one agent call is outstanding: while the stage is Analyzing the
    reducer rejects every submission.
    """
    def __init__(self, client: AgentClient, minor_defaults: Optional[MinorPlanDefaults] = None,
                 log: Optional[SessionLog] = None):
        self.client = client
        self.minor_defaults = minor_defaults or MinorPlanDefaults()
        self.log = log if log is not None else SessionLog()
        self.state = AppState()

    @property
    def stage(self) -> Stage:
        return self.state.stage

    def dispatch(self, event: Event) -> AppState:
        previous = type(self.state.stage).__name__
        self.state = reduce(self.state, event)
        logger.debug(f"{type(event).__name__}: {previous} -> {type(self.state.stage).__name__}")
        return self.state

    async def _run(self, call: Callable[[], Awaitable[Any]], on_success: Callable[[Any], Event],
                   failure_message: Optional[str]) -> bool:
        """
        Awaits one agent call and applies its outcome.
        Any failure rolls the stage back to where it was before the call.
        """
        try:
            result = await call()
        except Exception as e:
            logger.error(f"Agent call failed in {self.state.stage.request.value}: {e}")
            if failure_message:
                self.log.append("System", failure_message)
            self.dispatch(CollaboratorFailed(reason=str(e)))
            return False

        self.dispatch(on_success(result))
        return True

    def submit_name(self, name: str) -> Stage:
        return self.dispatch(NameSubmitted(name=name)).stage

    async def submit_age(self, age: int) -> Stage:
        self.dispatch(AgeSubmitted(age=age))
        stage = self.state.stage
        if isinstance(stage, Analyzing):
            self.log.append("Guidance Agent", f"Preparing curiosity-based quiz for {stage.identity.name}...")
            await self._run(
                lambda: self.client.generate_career_quiz(age),
                lambda questions: QuizReady(questions=tuple(questions)),
                "Quiz preparation failed. Please enter your age again.",
            )
        return self.state.stage

    async def submit_quiz(self, answers: Dict[int, str]) -> Stage:
        stage = self.state.stage
        questions = stage.questions if isinstance(stage, Quiz) else ()
        self.dispatch(QuizSubmitted(answers=dict(answers)))

        identity = self.state.stage.identity
        self.log.append("Career Predictor", f"Analyzing {identity.name}'s interests and potential...")
        await self._run(
            lambda: self.client.evaluate_quiz_results(identity.age, quiz_answers(questions, answers)),
            lambda result: QuizEvaluated(plan=build_minor_plan(result, self.minor_defaults)),
            "Quiz evaluation failed. Please try again.",
        )
        return self.state.stage

    async def submit_profile(self, sources: SourceBundle) -> Stage:
        self.dispatch(ProfileSubmitted(sources=sources))
        identity = self.state.stage.identity
        self.log.append("Profile Analyzer", f"Synthesizing {identity.name}'s professional data...")

        def analyzed(profile: Profile) -> Event:
            self.log.append("Profile Analyzer", "Consolidated profile successfully created.")
            return ProfileAnalyzed(profile=profile)

        await self._run(lambda: self.client.analyze_profile(sources), analyzed,
                        "Synthesis failed. Please try again.")
        return self.state.stage

    async def submit_role(self, role: str) -> Stage:
        self.dispatch(RoleSubmitted(role=role))
        stage = self.state.stage
        role = role.strip()
        self.log.append("Market Insights Agent",
                        f"Architecting the path for {stage.identity.name} to become a {role}...")

        def architected(plan: AdultPlan) -> Event:
            self.log.append("Gap Architect", "Mapping individual competencies to market benchmarks.")
            return PlanArchitected(plan=plan)

        await self._run(lambda: self.client.architect_career_plan(stage.resume.profile, role), architected,
                        "Agent reasoning failed.")
        return self.state.stage

    def toggle_architecture(self) -> bool:
        return self.dispatch(ArchitectureToggled()).show_architecture
