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
Data models for the Career Navigator application.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"


class SkillCategory(str, Enum):
    TECHNICAL = "Technical"
    SOFT = "Soft"
    DOMAIN = "Domain"


class RiskFactor(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class UserIdentity:
    """Name and age captured during onboarding."""
    name: str
    age: Optional[int] = None


@dataclass
class Skill:
    name: str
    level: SkillLevel
    category: SkillCategory


@dataclass
class Profile:
    """
    Consolidated professional profile.
    Produced once by the profile analyzer and read-only afterwards.
    """
    name: str
    current_title: str
    experience: List[str] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    education: List[str] = field(default_factory=list)
    age: Optional[int] = None


@dataclass(frozen=True)
class SourceBundle:
    """Raw text sources handed to the profile analyzer."""
    linkedin_text: str = ""
    github_info: str = ""
    resume_text: str = ""

    def has_content(self) -> bool:
        return any(s.strip() for s in (self.linkedin_text, self.github_info, self.resume_text))


@dataclass
class SkillGap:
    """A competency where the user falls short of the target role."""
    skill: str
    importance: float  # 1-10
    gap_description: str
    market_demand: str


@dataclass
class Resource:
    title: str
    url: str
    description: Optional[str] = None


@dataclass
class RoadmapTask:
    """One day (or self-paced module) of the learning roadmap."""
    day: int
    title: str
    description: str
    checkpoint: str
    learning_sources: List[Resource] = field(default_factory=list)
    mock_tests: List[Resource] = field(default_factory=list)
    mock_interviews: List[Resource] = field(default_factory=list)


@dataclass
class FutureOutlook:
    summary: str
    technological_shifts: List[str] = field(default_factory=list)
    emerging_skills: List[str] = field(default_factory=list)
    risk_factor: RiskFactor = RiskFactor.MEDIUM
    longevity_score: int = 50  # 1-100


@dataclass
class QuizQuestion:
    question: str
    options: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuizAnswer:
    question: str
    answer: str


@dataclass
class RecommendedPath:
    title: str
    description: str
    rationale: str
    skills_to_start_now: List[str] = field(default_factory=list)


@dataclass
class Under18Result:
    """Quiz evaluation for a user under 18."""
    recommended_paths: List[RecommendedPath]
    general_advice: str


@dataclass
class AdultPlan:
    """Full career plan: gaps, roadmap and outlook for a dream role."""
    dream_role: str
    market_analysis: str
    gaps: List[SkillGap]
    roadmap: List[RoadmapTask]
    future_outlook: FutureOutlook


@dataclass
class MinorPlan:
    """
    Plan shown to users under 18.
    Only `result` comes from the quiz evaluation; the rest is configured placeholder content.
    """
    dream_role: str
    market_analysis: str
    future_outlook: FutureOutlook
    result: Under18Result


CareerPlan = Union[AdultPlan, MinorPlan]


@dataclass(frozen=True)
class AgentLogEntry:
    """A single line of agent activity shown while analysis runs."""
    agent: str
    message: str
    timestamp: datetime
