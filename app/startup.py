"""Application startup for offline re-grading of recorded sessions.

Orchestrates configuration parsing, logging setup, dictionary harvesting,
session creation and replay of recorded backend results.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from app.session import AssessmentSession
from config.service import ConfigurationService, ConfigurationServiceFactory
from scoring.essay_scorer import ChatEssayScorer
from segmentation.segmenter import harvest_dictionary
from speech.replay_recognizer import ReplayRecognitionService
from speech.result_parser import parse_backend_result


def configure_logging(config_service: ConfigurationService) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    level = "DEBUG" if config_service.debug else config_service.log_level
    logger.add(sys.stderr, level=level)


def _parse_run_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Re-grade a recorded read-aloud session")
    parser.add_argument("--reference", required=True, help="File containing the reference text")
    parser.add_argument("--results", required=True, help="JSON file with a list of recorded backend results")
    parser.add_argument(
        "--calibration",
        help="Detailed backend result of the reference read as one utterance, used to build the dictionary",
    )
    parser.add_argument("--score-content", action="store_true", help="Also score vocabulary, grammar and topic")
    return parser.parse_args(argv)


def _load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _create_essay_scorer(config_service: ConfigurationService) -> Optional[ChatEssayScorer]:
    if not config_service.essay_enabled:
        return None
    essay = config_service.raw_config.essay
    return ChatEssayScorer(
        resource_name=essay.resource_name,
        deployment=essay.deployment,
        api_version=essay.api_version,
        api_key=essay.api_key,
        timeout_s=essay.timeout_s,
    )


def run_application(argv: Optional[List[str]] = None) -> int:
    """Main application entry point.

    Orchestrates the startup sequence:
    1. Parse configuration from all sources (defaults, files, env, CLI)
    2. Configure logging
    3. Harvest the segmentation dictionary from a calibration result if given
    4. Replay the recorded results through a fresh AssessmentSession
    5. Print the report (and content scores) as JSON

    Returns:
        Process exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    config_service, unknown_args = ConfigurationServiceFactory.create_from_args(argv)
    configure_logging(config_service)
    args = _parse_run_args(unknown_args)

    try:
        reference_text = Path(args.reference).read_text(encoding="utf-8")
        recorded = _load_json(args.results)
        calibration = _load_json(args.calibration) if args.calibration else None
    except (json.JSONDecodeError, OSError) as e:
        logger.error(f"Cannot read input files: {e}")
        return 2
    if not isinstance(recorded, list):
        logger.error(f"{args.results} must contain a JSON list of results")
        return 2
    if calibration is not None and not isinstance(calibration, dict):
        logger.error(f"{args.calibration} must contain a single JSON result object")
        return 2

    dictionary = None
    if calibration is not None:
        dictionary = harvest_dictionary(parse_backend_result(calibration))
        logger.info(f"[segment] harvested {len(dictionary)} dictionary words")

    session = AssessmentSession(
        reference_text,
        config_service,
        dictionary=dictionary,
        essay_scorer=_create_essay_scorer(config_service),
    )
    try:
        result = session.run(ReplayRecognitionService(recorded, language=config_service.language))
        if result.is_failure():
            logger.error(f"Assessment failed: {result.error}")
            return 1

        output: Dict[str, Any] = {"report": result.unwrap().to_dict()}
        if session.was_canceled:
            output["canceled"] = str(session.cancellation)
        if args.score_content:
            content = session.score_content()
            output["content"] = content.map(lambda scores: scores.to_dict()).unwrap_or(None)
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0
    finally:
        session.close()
