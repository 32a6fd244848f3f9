# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Modelware Configuration.

Centralized storage for all settings and default texts.
Loads environment variables and provides typed access to them.
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_TRUE_VALUES = ("true", "1", "yes")


def _env_flag(var_name: str, default: str = "true") -> bool:
    """Read a boolean flag from the environment (true/1/yes)."""
    return os.getenv(var_name, default).lower() in _TRUE_VALUES


# ==================================================================================================
# Logging Settings
# ==================================================================================================

# Log level for the loguru stderr sink
# Available levels: TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR, CRITICAL
DEFAULT_LOG_LEVEL: str = "INFO"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

# ==================================================================================================
# Middleware Toggles
# ==================================================================================================

# Reject requests using capabilities a model declares as unsupported.
# Disable only if the backend performs its own capability checks.
SUPPORT_VALIDATOR_ENABLED: bool = _env_flag("SUPPORT_VALIDATOR_ENABLED")

# Rewrite a leading system message for models with systemRole=false.
SYSTEM_PROMPT_SIMULATOR_ENABLED: bool = _env_flag("SYSTEM_PROMPT_SIMULATOR_ENABLED")

# Merge request docs into the last user message for models without
# native context support.
CONTEXT_AUGMENTER_ENABLED: bool = _env_flag("CONTEXT_AUGMENTER_ENABLED")

# ==================================================================================================
# System Prompt Simulation
# ==================================================================================================

# Marker placed before the original system instructions
DEFAULT_SYSTEM_PROMPT_PREFACE: str = "SYSTEM INSTRUCTIONS:\n"
SYSTEM_PROMPT_PREFACE: str = os.getenv("SYSTEM_PROMPT_PREFACE", DEFAULT_SYSTEM_PROMPT_PREFACE)

# Synthetic model reply inserted after the instructions
DEFAULT_SYSTEM_PROMPT_ACKNOWLEDGEMENT: str = "Understood."
SYSTEM_PROMPT_ACKNOWLEDGEMENT: str = os.getenv(
    "SYSTEM_PROMPT_ACKNOWLEDGEMENT", DEFAULT_SYSTEM_PROMPT_ACKNOWLEDGEMENT
)

# ==================================================================================================
# Context Augmentation
# ==================================================================================================

# Text placed before the rendered citation list
CONTEXT_PREFACE: str = "\n\nUse the following information to complete your task:\n\n"

# Document metadata field used as citation key before falling back to
# "ref", "id" and the document position. Empty means no custom field.
CONTEXT_CITATION_KEY: str = os.getenv("CONTEXT_CITATION_KEY", "")

# ==================================================================================================
# Application Version
# ==================================================================================================

APP_VERSION: str = "1.0"
APP_TITLE: str = "Modelware"
