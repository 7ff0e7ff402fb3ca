"""Assessment session orchestration: accumulation, event handling and use cases."""
from __future__ import annotations

from .accumulator import SessionAccumulator
from .session import AssessmentSession, CompletionGate
from .speech_event_handler import EventKind, SessionEvent, SpeechEventHandler
from .use_cases import AssessSessionUseCase, BuildReferenceWordsUseCase, ScoreContentUseCase

__all__ = [
    "AssessmentSession",
    "CompletionGate",
    "SessionAccumulator",
    "EventKind",
    "SessionEvent",
    "SpeechEventHandler",
    "AssessSessionUseCase",
    "BuildReferenceWordsUseCase",
    "ScoreContentUseCase",
]
