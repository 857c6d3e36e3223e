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
Onboarding stages and the pure reducer that moves between them.

    NameInput -> AgeInput -> ProfileInput -> Analyzing -> DreamRole -> Analyzing -> Dashboard
                          \\-> Analyzing -> Quiz -> Analyzing -> Dashboard      (age < 18)

Each stage is its own dataclass and carries only what it needs. Analyzing
remembers the stage to resume if the pending collaborator call fails.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from career_navigator.config import MinorPlanDefaults
from career_navigator.errors import InputValidationError, InvalidTransitionError
from career_navigator.models import (
    AdultPlan, CareerPlan, MinorPlan, Profile, QuizAnswer, QuizQuestion,
    SourceBundle, Under18Result, UserIdentity,
)

ADULT_AGE = 18


# --- Stages ---

@dataclass(frozen=True)
class NameInput:
    pass


@dataclass(frozen=True)
class AgeInput:
    name: str


@dataclass(frozen=True)
class Quiz:
    identity: UserIdentity
    questions: Tuple[QuizQuestion, ...]


@dataclass(frozen=True)
class ProfileInput:
    identity: UserIdentity


@dataclass(frozen=True)
class DreamRole:
    identity: UserIdentity
    profile: Profile


class AnalysisRequest(str, Enum):
    QUIZ_GENERATION = "quiz_generation"
    QUIZ_EVALUATION = "quiz_evaluation"
    PROFILE_ANALYSIS = "profile_analysis"
    PLAN_ARCHITECTURE = "plan_architecture"


@dataclass(frozen=True)
class Analyzing:
    identity: UserIdentity
    request: AnalysisRequest
    resume: "Stage"


@dataclass(frozen=True)
class Dashboard:
    identity: UserIdentity
    plan: CareerPlan
    profile: Optional[Profile] = None


Stage = Union[NameInput, AgeInput, Quiz, ProfileInput, DreamRole, Analyzing, Dashboard]


@dataclass(frozen=True)
class AppState:
    stage: Stage = field(default_factory=NameInput)
    show_architecture: bool = False


# --- Events ---

@dataclass(frozen=True)
class NameSubmitted:
    name: str


@dataclass(frozen=True)
class AgeSubmitted:
    age: int


@dataclass(frozen=True)
class QuizSubmitted:
    answers: Dict[int, str]


@dataclass(frozen=True)
class ProfileSubmitted:
    sources: SourceBundle


@dataclass(frozen=True)
class RoleSubmitted:
    role: str


@dataclass(frozen=True)
class QuizReady:
    questions: Tuple[QuizQuestion, ...]


@dataclass(frozen=True)
class QuizEvaluated:
    plan: MinorPlan


@dataclass(frozen=True)
class ProfileAnalyzed:
    profile: Profile


@dataclass(frozen=True)
class PlanArchitected:
    plan: AdultPlan


@dataclass(frozen=True)
class CollaboratorFailed:
    reason: str = ""


@dataclass(frozen=True)
class ArchitectureToggled:
    pass


Event = Union[
    NameSubmitted, AgeSubmitted, QuizSubmitted, ProfileSubmitted, RoleSubmitted,
    QuizReady, QuizEvaluated, ProfileAnalyzed, PlanArchitected, CollaboratorFailed,
    ArchitectureToggled,
]


# --- Input preconditions ---

def can_submit_name(name: str) -> bool:
    return bool(name and name.strip())


def parse_age(text: str) -> Optional[int]:
    """Returns the age as a non-negative int, or None when the text is not one."""
    try:
        age = int(str(text).strip())
    except ValueError:
        return None
    return age if age >= 0 else None


def is_minor(age: int) -> bool:
    return age < ADULT_AGE


def can_submit_quiz(questions: Sequence[QuizQuestion], answers: Dict[int, str]) -> bool:
    """True only when every question has one of its own options selected."""
    if not questions:
        return False
    return all(answers.get(i) in q.options for i, q in enumerate(questions))


def can_submit_profile(sources: SourceBundle) -> bool:
    return sources.has_content()


def can_submit_role(role: str) -> bool:
    return bool(role and role.strip())


def quiz_answers(questions: Sequence[QuizQuestion], answers: Dict[int, str]) -> List[QuizAnswer]:
    return [QuizAnswer(question=q.question, answer=answers[i]) for i, q in enumerate(questions)]


def build_minor_plan(result: Under18Result, defaults: MinorPlanDefaults) -> MinorPlan:
    return MinorPlan(
        dream_role=defaults.dream_role,
        market_analysis=result.general_advice,
        future_outlook=defaults.future_outlook(),
        result=result,
    )


# --- Reducer ---

def reduce(state: AppState, event: Event) -> AppState:
    """
    Returns the state after `event`.
    Raises InputValidationError for a submission whose precondition does not hold,
    and InvalidTransitionError for an event the current stage does not accept.
    """
    if isinstance(event, ArchitectureToggled):
        return replace(state, show_architecture=not state.show_architecture)
    return replace(state, stage=_next_stage(state.stage, event))


def _next_stage(stage: Stage, event: Event) -> Stage:
    match (stage, event):
        case (NameInput(), NameSubmitted(name=name)):
            if not can_submit_name(name):
                raise InputValidationError("Name must not be empty")
            return AgeInput(name=name.strip())

        case (AgeInput(name=name), AgeSubmitted(age=age)):
            if age is None or age < 0:
                raise InputValidationError(f"Invalid age: {age}")
            identity = UserIdentity(name=name, age=age)
            if is_minor(age):
                return Analyzing(identity, AnalysisRequest.QUIZ_GENERATION, resume=stage)
            return ProfileInput(identity)

        case (Analyzing(request=AnalysisRequest.QUIZ_GENERATION, identity=identity), QuizReady(questions=questions)):
            return Quiz(identity, tuple(questions))

        case (Quiz(identity=identity, questions=questions), QuizSubmitted(answers=answers)):
            if not can_submit_quiz(questions, answers):
                answered = sum(1 for i, q in enumerate(questions) if answers.get(i) in q.options)
                raise InputValidationError(f"Quiz incomplete: {answered} of {len(questions)} answered")
            return Analyzing(identity, AnalysisRequest.QUIZ_EVALUATION, resume=AgeInput(name=identity.name))

        case (Analyzing(request=AnalysisRequest.QUIZ_EVALUATION, identity=identity), QuizEvaluated(plan=plan)):
            return Dashboard(identity, plan=plan)

        case (ProfileInput(identity=identity), ProfileSubmitted(sources=sources)):
            if not can_submit_profile(sources):
                raise InputValidationError("At least one profile source is required")
            return Analyzing(identity, AnalysisRequest.PROFILE_ANALYSIS, resume=stage)

        case (Analyzing(request=AnalysisRequest.PROFILE_ANALYSIS, identity=identity), ProfileAnalyzed(profile=profile)):
            # The user's own name and age win over whatever the sources claim
            return DreamRole(identity, replace(profile, name=identity.name, age=identity.age))

        case (DreamRole(identity=identity), RoleSubmitted(role=role)):
            if not can_submit_role(role):
                raise InputValidationError("Dream role must not be empty")
            return Analyzing(identity, AnalysisRequest.PLAN_ARCHITECTURE, resume=stage)

        case (Analyzing(request=AnalysisRequest.PLAN_ARCHITECTURE, identity=identity,
                        resume=DreamRole(profile=profile)), PlanArchitected(plan=plan)):
            return Dashboard(identity, plan=plan, profile=profile)

        case (Analyzing(resume=resume), CollaboratorFailed()):
            return resume

        case _:
            raise InvalidTransitionError(
                f"{type(event).__name__} is not accepted in stage {type(stage).__name__}"
            )
