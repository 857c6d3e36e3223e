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

import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from career_navigator.config import NavigatorConfig, load_minor_defaults, resolve_ca_bundle
from career_navigator.errors import ConfigurationError
from career_navigator.models import RiskFactor


class TestResolveCaBundle(unittest.TestCase):
    def test_override_wins(self):
        with patch.dict(os.environ, {"REQUESTS_CA_BUNDLE": "/env/ca.pem"}, clear=True):
            self.assertEqual(resolve_ca_bundle("/cli/ca.pem"), "/cli/ca.pem")

    def test_env_priority(self):
        env = {"CURL_CA_BUNDLE": "/curl.pem", "SSL_CERT_FILE": "/ssl.pem"}
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(resolve_ca_bundle(), "/curl.pem")
        with patch.dict(os.environ, {"SSL_CERT_FILE": "/ssl.pem"}, clear=True):
            self.assertEqual(resolve_ca_bundle(), "/ssl.pem")

    def test_system_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIs(resolve_ca_bundle(), True)


class TestFromEnv(unittest.TestCase):
    def test_defaults_to_gemini(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "g"}, clear=True):
            config = NavigatorConfig.from_env()
        self.assertEqual(config.provider, "gemini")
        self.assertEqual(config.api_key, "g")
        self.assertEqual(config.fast_model, "gemini-2.5-flash")

    def test_openai_only_key_selects_openai(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}, clear=True):
            config = NavigatorConfig.from_env()
        self.assertEqual(config.provider, "openai")
        self.assertEqual(config.api_key, "sk-test")

    def test_explicit_provider_and_models(self):
        env = {"GEMINI_API_KEY": "g", "NAVIGATOR_PROVIDER": "OpenAI", "NAVIGATOR_OPENAI_MODEL": "gpt-4o"}
        with patch.dict(os.environ, env, clear=True):
            config = NavigatorConfig.from_env()
        self.assertEqual(config.provider, "openai")
        self.assertEqual(config.openai_model, "gpt-4o")
        self.assertIsNone(config.api_key)

    def test_unknown_provider(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigurationError):
                NavigatorConfig.from_env(provider="claude")

    def test_apply_ssl_env(self):
        config = NavigatorConfig(ca_bundle="/corp/ca.pem")
        with patch.dict(os.environ, {}, clear=True):
            config.apply_ssl_env()
            self.assertEqual(os.environ["SSL_CERT_FILE"], "/corp/ca.pem")


class TestMinorDefaults(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def write(self, content):
        path = os.path.join(self.test_dir, "minor.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_no_path_gives_builtin_defaults(self):
        defaults = load_minor_defaults(None)
        self.assertEqual(defaults.dream_role, "Future Explorer")
        outlook = defaults.future_outlook()
        self.assertEqual(outlook.risk_factor, RiskFactor.LOW)
        self.assertEqual(outlook.longevity_score, 100)

    def test_partial_override(self):
        path = self.write(json.dumps({"dream_role": "Young Innovator", "risk_factor": "Medium"}))
        defaults = load_minor_defaults(path)
        self.assertEqual(defaults.dream_role, "Young Innovator")
        self.assertEqual(defaults.risk_factor, RiskFactor.MEDIUM)
        self.assertEqual(defaults.longevity_score, 100)

    def test_unknown_key_rejected(self):
        path = self.write(json.dumps({"favourite_colour": "blue"}))
        with self.assertRaises(ConfigurationError):
            load_minor_defaults(path)

    def test_unreadable_file(self):
        with self.assertRaises(ConfigurationError):
            load_minor_defaults(os.path.join(self.test_dir, "missing.json"))
        with self.assertRaises(ConfigurationError):
            load_minor_defaults(self.write("{not json"))


if __name__ == '__main__':
    unittest.main()
