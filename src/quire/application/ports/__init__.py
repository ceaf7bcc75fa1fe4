"""Application ports - interfaces for external adapters."""

from quire.application.ports.document_writer import DocumentWriter
from quire.application.ports.image_generator import ImageGenerator
from quire.application.ports.segmenter import Segmenter
from quire.application.ports.speech_synthesizer import SpeechSynthesizer
from quire.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "DocumentWriter",
    "ImageGenerator",
    "Segmenter",
    "SpeechSynthesizer",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
