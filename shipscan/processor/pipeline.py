from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from shipscan.extraction.models import ResolvedExtraction
from shipscan.processor.models import Checkpoint
from shipscan.recognition.models import RawScan, RecognitionResult


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    scan: RawScan
    recognition: RecognitionResult | None = None
    extraction: ResolvedExtraction | None = None
    error_message: str = ""


class PipelineStep(ABC):
    checkpoint: ClassVar[Checkpoint | None] = None

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
