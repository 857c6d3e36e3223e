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
JSON Schemas for every structured collaborator response, and the mappers
that turn a validated response into model dataclasses.

The same schema dict is sent to the model as the response schema and used
to validate the answer locally, so a response is either fully mapped or
rejected with SchemaViolationError.
"""

import logging
from typing import Any, Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from career_navigator.errors import SchemaViolationError
from career_navigator.models import (
    AdultPlan, FutureOutlook, Profile, QuizQuestion, RecommendedPath, Resource,
    RiskFactor, RoadmapTask, Skill, SkillCategory, SkillGap, SkillLevel, Under18Result,
)

logger = logging.getLogger(__name__)

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}

RESOURCE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": _STRING,
        "url": _STRING,
        "description": _STRING,
    },
    "required": ["title", "url"],
}

QUIZ_SCHEMA = {
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "properties": {
            "question": _STRING,
            "options": {"type": "array", "items": _STRING, "minItems": 1},
        },
        "required": ["question", "options"],
    },
}

UNDER18_SCHEMA = {
    "type": "object",
    "properties": {
        "recommendedPaths": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": _STRING,
                    "description": _STRING,
                    "why": _STRING,
                    "skillsToStartNow": _STRING_LIST,
                },
                "required": ["title", "description", "why", "skillsToStartNow"],
            },
        },
        "generalAdvice": _STRING,
    },
    "required": ["recommendedPaths", "generalAdvice"],
}

PROFILE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": _STRING,
        "currentTitle": _STRING,
        "experience": _STRING_LIST,
        "skills": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": _STRING,
                    "level": {"type": "string", "enum": [lvl.value for lvl in SkillLevel]},
                    "category": {"type": "string", "enum": [cat.value for cat in SkillCategory]},
                },
                "required": ["name", "level", "category"],
            },
        },
        "education": _STRING_LIST,
    },
    "required": ["name", "currentTitle", "experience", "skills", "education"],
}

FUTURE_OUTLOOK_SCHEMA = {
    "type": "object",
    "properties": {
        "summary": _STRING,
        "technologicalShifts": _STRING_LIST,
        "emergingSkills": _STRING_LIST,
        "riskFactor": {"type": "string", "enum": [risk.value for risk in RiskFactor]},
        "longevityScore": {"type": "number", "minimum": 1, "maximum": 100},
    },
    "required": ["summary", "technologicalShifts", "emergingSkills", "riskFactor", "longevityScore"],
}

CAREER_PLAN_SCHEMA = {
    "type": "object",
    "properties": {
        "dreamRole": _STRING,
        "marketAnalysis": _STRING,
        "gaps": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "skill": _STRING,
                    "importance": {"type": "number", "minimum": 0, "maximum": 10},
                    "gapDescription": _STRING,
                    "marketDemand": _STRING,
                },
                "required": ["skill", "importance", "gapDescription", "marketDemand"],
            },
        },
        "roadmap": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "day": {"type": "integer", "minimum": 1},
                    "title": _STRING,
                    "description": _STRING,
                    "learningSources": {"type": "array", "items": RESOURCE_SCHEMA},
                    "mockTests": {"type": "array", "items": RESOURCE_SCHEMA},
                    "mockInterviews": {"type": "array", "items": RESOURCE_SCHEMA},
                    "checkpoint": _STRING,
                },
                "required": ["day", "title", "description", "checkpoint"],
            },
        },
        "futureOutlook": FUTURE_OUTLOOK_SCHEMA,
    },
    "required": ["dreamRole", "marketAnalysis", "gaps", "roadmap", "futureOutlook"],
}


def validate(data: Any, schema: Dict[str, Any], label: str) -> None:
    """Raises SchemaViolationError with the most relevant error if data does not match schema."""
    error = best_match(Draft7Validator(schema).iter_errors(data))
    if error is not None:
        path = "/".join(str(p) for p in error.absolute_path) or "<root>"
        logger.debug(f"{label} failed validation at {path}: {error.message}")
        raise SchemaViolationError(f"{label} response invalid at {path}: {error.message}")


def _resources(items: List[Dict[str, Any]]) -> List[Resource]:
    return [Resource(title=r["title"], url=r["url"], description=r.get("description")) for r in items]


def parse_quiz(data: Any) -> List[QuizQuestion]:
    validate(data, QUIZ_SCHEMA, "Quiz")
    return [QuizQuestion(question=q["question"], options=list(q["options"])) for q in data]


def parse_under18_result(data: Any) -> Under18Result:
    validate(data, UNDER18_SCHEMA, "Quiz evaluation")
    paths = [
        RecommendedPath(
            title=p["title"],
            description=p["description"],
            rationale=p["why"],
            skills_to_start_now=list(p["skillsToStartNow"]),
        )
        for p in data["recommendedPaths"]
    ]
    return Under18Result(recommended_paths=paths, general_advice=data["generalAdvice"])


def parse_profile(data: Any) -> Profile:
    validate(data, PROFILE_SCHEMA, "Profile")
    return Profile(
        name=data["name"],
        current_title=data["currentTitle"],
        experience=list(data["experience"]),
        skills=[
            Skill(name=s["name"], level=SkillLevel(s["level"]), category=SkillCategory(s["category"]))
            for s in data["skills"]
        ],
        education=list(data["education"]),
    )


def parse_future_outlook(data: Any) -> FutureOutlook:
    validate(data, FUTURE_OUTLOOK_SCHEMA, "Future outlook")
    return FutureOutlook(
        summary=data["summary"],
        technological_shifts=list(data["technologicalShifts"]),
        emerging_skills=list(data["emergingSkills"]),
        risk_factor=RiskFactor(data["riskFactor"]),
        longevity_score=int(data["longevityScore"]),
    )


def parse_career_plan(data: Any) -> AdultPlan:
    """
    Maps a plan-synthesis response to an AdultPlan.
    Roadmap days key the completion checklist, so repeated days are rejected.
    """
    validate(data, CAREER_PLAN_SCHEMA, "Career plan")

    seen = set()
    for task in data["roadmap"]:
        if task["day"] in seen:
            raise SchemaViolationError(f"Career plan repeats roadmap day {task['day']}")
        seen.add(task["day"])

    gaps = [
        SkillGap(
            skill=g["skill"],
            importance=g["importance"],
            gap_description=g["gapDescription"],
            market_demand=g["marketDemand"],
        )
        for g in data["gaps"]
    ]
    roadmap = [
        RoadmapTask(
            day=int(t["day"]),
            title=t["title"],
            description=t["description"],
            checkpoint=t["checkpoint"],
            learning_sources=_resources(t.get("learningSources", [])),
            mock_tests=_resources(t.get("mockTests", [])),
            mock_interviews=_resources(t.get("mockInterviews", [])),
        )
        for t in data["roadmap"]
    ]
    return AdultPlan(
        dream_role=data["dreamRole"],
        market_analysis=data["marketAnalysis"],
        gaps=gaps,
        roadmap=roadmap,
        future_outlook=parse_future_outlook(data["futureOutlook"]),
    )
