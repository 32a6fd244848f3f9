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
Modelware command line entry point.

Runs a generation request (JSON) through the middleware chain of a model and
prints the request as the model would receive it. The model itself is an echo
action, so nothing is sent anywhere.

Usage:
    python main.py request.json --model-info model.json
    cat request.json | python main.py - --log-level DEBUG

Exit codes:
    0 - success
    2 - request, model info or log level could not be decoded
    3 - request rejected by the support validator
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from loguru import logger

from modelware.config import APP_TITLE, APP_VERSION, LOG_LEVEL
from modelware.errors import RequestDecodeError, UnsupportedCapabilityError
from modelware.middleware.pipeline import MiddlewarePipeline, build_model_middleware
from modelware.types import GenerateRequest, GenerateResponse, Message, ModelInfo, Part

EXIT_OK = 0
EXIT_DECODE_ERROR = 2
EXIT_UNSUPPORTED = 3

# Model descriptor used when --model-info is not given
DEFAULT_MODEL_NAME = "echo"

# Accepted by --log-level; LOG_LEVEL from the environment is checked by loguru
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Replace loguru's default sink with a stderr sink at the given level.

    Raises:
        ValueError: Unknown level name (existing sinks are left in place)
    """
    level = level.upper()
    # Resolve first so a bad name does not leave loguru without sinks
    logger.level(level)
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="modelware",
        description=f"{APP_TITLE} v{APP_VERSION} - run a generation request through model middleware",
    )
    parser.add_argument(
        "request",
        help="Path to a request JSON file, or - to read from stdin",
    )
    parser.add_argument(
        "-m",
        "--model-info",
        default=None,
        help="Path to a model info JSON file ({\"name\": ..., \"supports\": {...}})",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help=f"Log level (default from LOG_LEVEL env: {LOG_LEVEL})",
    )
    parser.add_argument("--no-validate", action="store_true", help="Skip the support validator")
    parser.add_argument("--no-simulate", action="store_true", help="Skip system prompt simulation")
    parser.add_argument("--no-augment", action="store_true", help="Skip context augmentation")
    return parser.parse_args(argv)


def load_json(source: str) -> Any:
    """
    Load a JSON document from a file path or stdin ("-").

    Raises:
        RequestDecodeError: File missing or not valid JSON
    """
    try:
        if source == "-":
            return json.load(sys.stdin)
        return json.loads(Path(source).read_text(encoding="utf-8"))
    except OSError as e:
        raise RequestDecodeError(f"Cannot read {source}: {e}") from e
    except json.JSONDecodeError as e:
        raise RequestDecodeError(f"Invalid JSON in {source}: {e}") from e


async def echo_model(request: GenerateRequest) -> GenerateResponse:
    """Model action returning the request it received as a data part."""
    return GenerateResponse(
        message=Message(role="model", content=[Part(data=request.to_dict())]),
        finish_reason="stop",
    )


async def transform_request(
    request: GenerateRequest,
    model_info: ModelInfo,
    args: argparse.Namespace,
) -> GenerateRequest:
    """Run the request through the model's middleware and return what the model saw."""
    stages = build_model_middleware(
        model_info,
        enable_support_validation=not args.no_validate,
        enable_system_prompt_simulation=not args.no_simulate,
        enable_context_augmentation=not args.no_augment,
    )
    response = await MiddlewarePipeline(stages, echo_model).run(request)
    return GenerateRequest.from_dict(response.message.content[0].data)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_cli_args(argv)
    try:
        setup_logging(args.log_level or LOG_LEVEL)
    except ValueError as e:
        logger.error("Invalid log level {!r}: {}", args.log_level or LOG_LEVEL, e)
        return EXIT_DECODE_ERROR

    try:
        request = GenerateRequest.from_dict(load_json(args.request))
        if args.model_info:
            model_info = ModelInfo.from_dict(load_json(args.model_info))
        else:
            model_info = ModelInfo(name=DEFAULT_MODEL_NAME)
    except RequestDecodeError as e:
        logger.error("Failed to decode input: {}", e)
        return EXIT_DECODE_ERROR

    try:
        transformed = asyncio.run(transform_request(request, model_info, args))
    except UnsupportedCapabilityError as e:
        logger.error("{}", e)
        return EXIT_UNSUPPORTED

    print(json.dumps(transformed.to_dict(), ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
