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
Runtime configuration for the Career Navigator.

Values come from environment variables, optionally overridden by CLI flags.
The CA bundle for outbound HTTPS is resolved in priority order:
  1. Explicit --ca-bundle override
  2. REQUESTS_CA_BUNDLE
  3. CURL_CA_BUNDLE
  4. SSL_CERT_FILE
  5. System defaults (True)
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from career_navigator.errors import ConfigurationError
from career_navigator.models import FutureOutlook, RiskFactor

logger = logging.getLogger(__name__)

CA_BUNDLE_ENV_VARS = ("REQUESTS_CA_BUNDLE", "CURL_CA_BUNDLE", "SSL_CERT_FILE")

DEFAULT_FAST_MODEL = "gemini-2.5-flash"
DEFAULT_REASONING_MODEL = "gemini-2.5-pro"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


@dataclass
class MinorPlanDefaults:
    """
    Placeholder content for plans built from a quiz evaluation.
    The quiz evaluation only yields recommended paths and advice; the rest of the dashboard uses these.
    """
    dream_role: str = "Future Explorer"
    outlook_summary: str = "Your career is a blank canvas. Start painting today."
    technological_shifts: List[str] = field(default_factory=lambda: [
        "Hyper-Personalization", "General AI Assistants", "Space Economy",
    ])
    emerging_skills: List[str] = field(default_factory=lambda: [
        "Prompt Engineering", "Digital Literacy", "Emotional Intelligence",
    ])
    risk_factor: RiskFactor = RiskFactor.LOW
    longevity_score: int = 100

    def future_outlook(self) -> FutureOutlook:
        return FutureOutlook(
            summary=self.outlook_summary,
            technological_shifts=list(self.technological_shifts),
            emerging_skills=list(self.emerging_skills),
            risk_factor=self.risk_factor,
            longevity_score=self.longevity_score,
        )


MINOR_DEFAULTS_SCHEMA = {
    "type": "object",
    "properties": {
        "dream_role": {"type": "string", "minLength": 1},
        "outlook_summary": {"type": "string"},
        "technological_shifts": {"type": "array", "items": {"type": "string"}},
        "emerging_skills": {"type": "array", "items": {"type": "string"}},
        "risk_factor": {"type": "string", "enum": [r.value for r in RiskFactor]},
        "longevity_score": {"type": "integer", "minimum": 1, "maximum": 100},
    },
    "additionalProperties": False,
}


def load_minor_defaults(path: Optional[str]) -> MinorPlanDefaults:
    """Reads MinorPlanDefaults overrides from a JSON file; missing keys keep their defaults."""
    if not path:
        return MinorPlanDefaults()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read minor plan defaults from {path}: {e}") from e

    error = best_match(Draft7Validator(MINOR_DEFAULTS_SCHEMA).iter_errors(data))
    if error is not None:
        raise ConfigurationError(f"Invalid minor plan defaults in {path}: {error.message}")

    if "risk_factor" in data:
        data["risk_factor"] = RiskFactor(data["risk_factor"])
    logger.info(f"Loaded minor plan defaults from {path}")
    return MinorPlanDefaults(**data)


def resolve_ca_bundle(override: Optional[str] = None) -> str | bool:
    """
    Returns a CA bundle path for outbound HTTPS, or True to use the system trust store.
    """
    if override:
        return override

    for var in CA_BUNDLE_ENV_VARS:
        value = os.environ.get(var)
        if value:
            logger.debug(f"Using CA bundle from {var}: {value}")
            return value

    return True


@dataclass
class NavigatorConfig:
    """Provider credentials, model choices and display settings."""
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    provider: str = "gemini"
    fast_model: str = DEFAULT_FAST_MODEL
    reasoning_model: str = DEFAULT_REASONING_MODEL
    openai_model: str = DEFAULT_OPENAI_MODEL
    ca_bundle: str | bool = True
    minor_defaults: MinorPlanDefaults = field(default_factory=MinorPlanDefaults)
    display_gap_limit: int = 6
    log_panel_size: int = 8
    log_dir: Path = Path("user_content/logs")

    @classmethod
    def from_env(cls, ca_bundle: Optional[str] = None, minor_defaults_path: Optional[str] = None,
                 provider: Optional[str] = None) -> "NavigatorConfig":
        gemini_key = os.environ.get("GEMINI_API_KEY")
        openai_key = os.environ.get("OPENAI_API_KEY")

        chosen = provider or os.environ.get("NAVIGATOR_PROVIDER")
        if not chosen:
            # An sk- key with no Gemini key means OpenAI
            chosen = "openai" if (openai_key and not gemini_key) else "gemini"
        chosen = chosen.lower()
        if chosen not in ("gemini", "openai"):
            raise ConfigurationError(f"Unknown provider '{chosen}'. Use 'gemini' or 'openai'.")

        return cls(
            gemini_api_key=gemini_key,
            openai_api_key=openai_key,
            provider=chosen,
            fast_model=os.environ.get("NAVIGATOR_FAST_MODEL", DEFAULT_FAST_MODEL),
            reasoning_model=os.environ.get("NAVIGATOR_REASONING_MODEL", DEFAULT_REASONING_MODEL),
            openai_model=os.environ.get("NAVIGATOR_OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
            ca_bundle=resolve_ca_bundle(ca_bundle),
            minor_defaults=load_minor_defaults(minor_defaults_path),
        )

    @property
    def api_key(self) -> Optional[str]:
        if self.provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    def apply_ssl_env(self) -> None:
        """
        Exports a custom CA bundle as SSL_CERT_FILE for the httpx-based SDKs
        (google-genai, openai), which read it directly.
        """
        if isinstance(self.ca_bundle, str) and os.environ.get("SSL_CERT_FILE") != self.ca_bundle:
            os.environ["SSL_CERT_FILE"] = self.ca_bundle
            logger.debug(f"Set SSL_CERT_FILE={self.ca_bundle} for SDK clients")
