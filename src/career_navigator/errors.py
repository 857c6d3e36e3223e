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
Exception types raised across the Career Navigator.
"""


class NavigatorError(Exception):
    """Base class for all navigator errors."""


class CollaboratorCallError(NavigatorError):
    """A generative-content call was rejected, failed in transport, or could not be made."""


class SchemaViolationError(CollaboratorCallError):
    """The collaborator answered, but the content is not valid JSON of the expected shape."""


class ExtractionError(NavigatorError):
    """Text could not be extracted from an uploaded document."""


class InputValidationError(NavigatorError):
    """A submission did not satisfy the local precondition of its stage."""


class InvalidTransitionError(NavigatorError):
    """An event was delivered to a stage that does not accept it."""


class ConfigurationError(NavigatorError):
    """Configuration values or files are invalid."""
