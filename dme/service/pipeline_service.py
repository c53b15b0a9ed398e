from __future__ import annotations

import time
from pathlib import Path
from typing import Dict, Optional, Union

from dme.domain.ports.Field_extractor_provider import Field_extractor_provider
from dme.domain.ports.Pipeline_interface import Pipeline_interface
from dme.domain.ports.Serializer_provider import Serializer_provider
from dme.domain.ports.Submission_provider import Submission_provider
from dme.domain.schemas.extraction_method import Extraction_method
from dme.domain.schemas.input_data import InputData, NotePayload, ProcessingOptions
from dme.domain.schemas.result_data import MetaInfo, ResultData
from dme.lib.logger import get_logger
from .field_extractor_service import FieldExtractorService
from .format_detector_service import FormatDetectorService
from .llm_service import LLMService
from .note_reader_service import NoteReaderService
from .serializer_service import ResultSerializerService
from .settings_service import EnvSettings
from .submission_service import SubmissionService


class PipelineService(Pipeline_interface):
    """Raw note -> note text -> ExtractionResult -> canonical JSON [-> submission].

    The extraction strategy is chosen once from EXTRACTION_METHOD. Extra
    strategies can be handed in via ``extractors`` so a request may pick
    between them with ``ProcessingOptions.extraction_method``.
    """

    def __init__(
        self,
        settings: Optional[EnvSettings] = None,
        extractors: Optional[Dict[Extraction_method, Field_extractor_provider]] = None,
        detector: Optional[FormatDetectorService] = None,
        serializer: Optional[Serializer_provider] = None,
        submitter: Optional[Submission_provider] = None,
    ) -> None:
        self.logger = get_logger("pipeline")
        self.settings = settings or EnvSettings()
        self.method = self.settings.extraction_method
        self.detector = detector or FormatDetectorService()
        self.reader = NoteReaderService(self.detector)
        self.serializer = serializer or ResultSerializerService()
        self.submitter = submitter or SubmissionService(timeout_s=self.settings.get_float("SUBMIT_TIMEOUT_S"))

        self.extractors: Dict[Extraction_method, Field_extractor_provider] = dict(extractors or {})
        if self.method not in self.extractors:
            self.extractors[self.method] = self._build_extractor(self.method)
        self.logger.info(
            "pipeline ready: method=%s; available=%s",
            self.method.value,
            ", ".join(m.value for m in self.extractors),
        )

    def _build_extractor(self, method: Extraction_method) -> Field_extractor_provider:
        if method is Extraction_method.LLM:
            return LLMService.from_settings(self.settings)
        return FieldExtractorService()

    def _select_extractor(self, requested: Optional[Extraction_method]) -> tuple[Extraction_method, Field_extractor_provider]:
        method = requested or self.method
        extractor = self.extractors.get(method)
        if extractor is None:
            raise ValueError(f"extraction method '{method.value}' is not enabled")
        return method, extractor

    def run(self, input_data: InputData) -> ResultData:
        t0 = time.perf_counter()
        method, extractor = self._select_extractor(input_data.options.extraction_method)
        meta = MetaInfo(
            request_id=input_data.context.request_id or None,
            extraction_method=method.value,
            timings_ms={},
        )
        self.logger.info(
            "start pipeline: method=%s; source=%s",
            method.value,
            input_data.note.source_name or input_data.note.path or "inline",
        )

        # 1) Read + detect input format
        if input_data.note.text is not None:
            raw = input_data.note.text
        else:
            raw = self.reader.read_raw(input_data.note.path)
        fmt = self.detector.detect(raw)
        note_text = fmt.extract_note_text(raw)
        meta.input_format = fmt.name
        meta.timings_ms["detect"] = int((time.perf_counter() - t0) * 1000)
        self.logger.info("detect: format=%s; note=%d chars", fmt.name, len(note_text))

        # 2) Field extraction
        t1 = time.perf_counter()
        result = extractor.extract(note_text)
        meta.timings_ms["extract"] = int((time.perf_counter() - t1) * 1000)

        # 3) Canonical JSON
        t2 = time.perf_counter()
        payload = self.serializer.serialize(result)
        meta.timings_ms["serialize"] = int((time.perf_counter() - t2) * 1000)

        # 4) Submission, when asked for
        submitted: Optional[bool] = None
        if input_data.options.submit:
            endpoint = input_data.options.endpoint or self.settings.get("API_ENDPOINT")
            t3 = time.perf_counter()
            submitted = self.submitter.submit(payload, endpoint)
            meta.timings_ms["submit"] = int((time.perf_counter() - t3) * 1000)
            if not submitted:
                self.logger.error("DME data was not accepted by %s", endpoint)

        total_ms = int((time.perf_counter() - t0) * 1000)
        meta.timings_ms["total"] = total_ms
        self.logger.info("done: device=%s; total=%d ms", result.device, total_ms)

        return ResultData(meta=meta, note_text=note_text, result=result, payload=payload, submitted=submitted)

    def process_file(
        self, path: Union[str, Path], endpoint: Optional[str] = None, submit: bool = True
    ) -> ResultData:
        input_data = InputData(
            note=NotePayload(path=str(path), source_name=Path(path).name),
            options=ProcessingOptions(submit=submit, endpoint=endpoint),
        )
        return self.run(input_data)
