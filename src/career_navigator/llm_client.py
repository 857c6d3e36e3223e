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
Client for the generative agents behind the navigator.
Supports Google AI Studio (Gemini) and OpenAI.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import openai
from google import genai
from google.genai import types

from career_navigator.config import NavigatorConfig
from career_navigator.errors import CollaboratorCallError, SchemaViolationError
from career_navigator.models import AdultPlan, Profile, QuizAnswer, QuizQuestion, SourceBundle, Under18Result
from career_navigator.schemas import (
    CAREER_PLAN_SCHEMA, PROFILE_SCHEMA, QUIZ_SCHEMA, UNDER18_SCHEMA,
    parse_career_plan, parse_profile, parse_quiz, parse_under18_result,
)

# Logger is configured in main.py
logger = logging.getLogger(__name__)

QUIZ_THEMES = [
    "Problem solving & Logic",
    "Creativity & Design",
    "Helping others & Social Impact",
    "Building & Engineering",
    "Leadership & Strategy",
    "Nature & Environment",
    "Writing & Communication",
    "Science & Discovery",
]


class CareerAgentClient:
    """
    Abstraction layer for LLM providers.
    Every public call either returns fully validated models or raises CollaboratorCallError.
    """
    def __init__(self, config: NavigatorConfig):
        self.config = config
        self._gemini: Optional[genai.Client] = None
        self._openai: Optional[openai.AsyncOpenAI] = None
        if not config.api_key:
            logger.warning(f"No API key found for provider '{config.provider}'. Agent calls will fail.")

    @property
    def provider(self) -> str:
        return self.config.provider

    def _gemini_client(self) -> genai.Client:
        if self._gemini is None:
            self._gemini = genai.Client(api_key=self.config.gemini_api_key)
        return self._gemini

    def _openai_client(self) -> openai.AsyncOpenAI:
        if self._openai is None:
            self._openai = openai.AsyncOpenAI(api_key=self.config.openai_api_key)
        return self._openai

    async def _call_gemini(self, prompt: str, model: str, schema: Optional[Dict[str, Any]], search: bool) -> str:
        if schema is not None:
            config = types.GenerateContentConfig(
                response_mime_type="application/json",
                response_json_schema=schema,
            )
        elif search:
            config = types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())])
        else:
            config = None

        logger.debug(f"Gemini request to {model} (schema={schema is not None}, search={search})")
        response = await self._gemini_client().aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        return response.text or ""

    async def _call_openai(self, prompt: str, schema: Optional[Dict[str, Any]]) -> str:
        kwargs = {}
        if schema is not None:
            prompt = f"{prompt}\n\nReturn ONLY valid JSON matching this JSON Schema:\n{json.dumps(schema)}"
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug(f"OpenAI request to {self.config.openai_model} (schema={schema is not None})")
        response = await self._openai_client().chat.completions.create(
            model=self.config.openai_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
            **kwargs,
        )
        return response.choices[0].message.content or ""

    async def _call_llm(self, prompt: str, model: str, schema: Optional[Dict[str, Any]] = None,
                        search: bool = False) -> str:
        """
        Sends one prompt to the configured provider.
        Transport and SDK errors are wrapped in CollaboratorCallError.
        """
        if not self.config.api_key:
            raise CollaboratorCallError(f"No API key configured for provider '{self.provider}'")

        self.config.apply_ssl_env()
        try:
            if self.provider == "openai":
                return await self._call_openai(prompt, schema)
            return await self._call_gemini(prompt, model, schema, search)
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise CollaboratorCallError(f"{self.provider} call failed: {e}") from e

    async def _call_structured(self, prompt: str, model: str, schema: Dict[str, Any], label: str) -> Any:
        """Calls the provider with a response schema and returns the decoded JSON."""
        # OpenAI JSON mode only produces objects, so array schemas travel wrapped
        wrap = self.provider == "openai" and schema.get("type") == "array"
        request_schema = {"type": "object", "properties": {"items": schema}, "required": ["items"]} if wrap else schema

        text = await self._call_llm(prompt, model, schema=request_schema)
        try:
            data = json.loads(self._clean_json(text))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to decode LLM response for {label}")
            logger.debug(f"Raw response: {text}")
            raise SchemaViolationError(f"{label} response is not valid JSON: {e}") from e

        if wrap:
            if not isinstance(data, dict) or "items" not in data:
                raise SchemaViolationError(f"{label} response is missing the 'items' wrapper")
            data = data["items"]
        return data

    async def generate_career_quiz(self, age: int) -> List[QuizQuestion]:
        """
        Quiz Generator: personality and interest questions for a student under 18.
        """
        themes = "\n".join(f"{i}. {theme}" for i, theme in enumerate(QUIZ_THEMES, 1))
        prompt = f"""
        Generate a 10-question career interest quiz for a {age}-year-old student.
        The questions should be engaging and diverse, covering interests in:
        {themes}

        Each question should have 4 distinct options that map to different traits.
        """
        data = await self._call_structured(prompt, self.config.fast_model, QUIZ_SCHEMA, "Quiz")
        return parse_quiz(data)

    async def evaluate_quiz_results(self, age: int, answers: List[QuizAnswer]) -> Under18Result:
        """
        Junior Career Predictor: suggests future paths from quiz answers.
        """
        quiz_data = json.dumps([{"question": a.question, "answer": a.answer} for a in answers])
        prompt = f"""
        Analyze these quiz results for a {age}-year-old.
        Suggest 3 exciting career paths they could pursue when they grow up.
        Explain why each fits them ('why') and which skills they can start NOW ('skillsToStartNow').
        Finish with encouraging 'generalAdvice'.

        QUIZ DATA: {quiz_data}
        """
        data = await self._call_structured(prompt, self.config.reasoning_model, UNDER18_SCHEMA, "Quiz evaluation")
        return parse_under18_result(data)

    async def analyze_profile(self, sources: SourceBundle) -> Profile:
        """
        Profile Analyzer: consolidates LinkedIn, GitHub and resume text into one profile.
        """
        composite = f"""
        SOURCE: LINKEDIN
        {sources.linkedin_text or "N/A"}

        SOURCE: GITHUB
        {sources.github_info or "N/A"}

        SOURCE: RESUME
        {sources.resume_text[:100000] or "N/A"}
        """
        prompt = f"""
        You are an expert technical recruiter. Analyze the following composite professional data.
        Deduplicate and consolidate it into a unified profile.
        Rate each skill as Beginner, Intermediate or Expert and categorise it as Technical, Soft or Domain.

        DATA:
        {composite}
        """
        data = await self._call_structured(prompt, self.config.fast_model, PROFILE_SCHEMA, "Profile")
        return parse_profile(data)

    async def research_market(self, dream_role: str) -> str:
        """
        Market Insights pass: unstructured research text, grounded with Google Search on Gemini.
        """
        prompt = (
            f"Identify current requirements for '{dream_role}', predict its 10-year evolution, "
            "and find high-quality learning resources (YouTube, Coursera, Udemy), "
            "specialized mock test platforms (LeetCode, TestGorilla, certifications), "
            "and mock interview services (Pramp, Interviewing.io)."
        )
        return await self._call_llm(prompt, self.config.reasoning_model, search=True)

    async def architect_career_plan(self, profile: Profile, dream_role: str) -> AdultPlan:
        """
        Career Architect: market research followed by gap, roadmap and outlook synthesis.
        """
        market_text = await self.research_market(dream_role)
        logger.debug(f"Market research returned {len(market_text)} characters")

        profile_json = json.dumps({
            "name": profile.name,
            "currentTitle": profile.current_title,
            "experience": profile.experience,
            "skills": [{"name": s.name, "level": s.level.value, "category": s.category.value} for s in profile.skills],
            "education": profile.education,
            "age": profile.age,
        })
        prompt = f"""
        USER PROFILE: {profile_json}
        DREAM ROLE: {dream_role}
        MARKET RESEARCH: {market_text}

        Generate current skill gaps (importance 1-10), a 30-day modular roadmap, and a 10-year future outlook.

        RULES:
        1. Number roadmap tasks by 'day', starting at 1, each day used once.
        2. Each task must be a self-contained module so the user can learn at their own pace.
        3. Each task MUST include specific, working links for learning, mock tests, and mock interviews where applicable.
        4. Name the skill a task trains in its title or description, using the same wording as the gap.
        """
        data = await self._call_structured(prompt, self.config.reasoning_model, CAREER_PLAN_SCHEMA, "Career plan")
        return parse_career_plan(data)

    def _clean_json(self, text: str) -> str:
        """Helper to strip code fences from LLM output"""
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]
        return text.strip()
