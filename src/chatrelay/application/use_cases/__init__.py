"""Use cases."""

from chatrelay.application.use_cases.chat import ChatUseCase
from chatrelay.application.use_cases.image import GenerateImageUseCase
from chatrelay.application.use_cases.speech import SynthesizeSpeechUseCase

__all__ = [
    "ChatUseCase",
    "GenerateImageUseCase",
    "SynthesizeSpeechUseCase",
]
