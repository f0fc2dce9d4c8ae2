"""
Resume analysis pipeline.

    RECEIVED -> EXTRACTING -> PROMPTING -> QUERYING -> NORMALIZING -> PERSISTING -> DONE

Any step may move the invocation to FAILED, which short-circuits the rest.
The upload lives in a temporary file for exactly the duration of analyze().
"""
import asyncio
import enum
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import Settings
from ..errors import AnalysisTimeoutError, InvalidUploadError
from ..results import Err, Ok, Result
from ..schemas.resume import ResumeRecord, ResumeSummary
from .ai_client import GeminiAnalysisClient
from .normalizer import normalize_response
from .prompts import build_analysis_prompt
from .resume_store import ResumeRecordStore
from .text_extractor import extract_text

logger = logging.getLogger(__name__)

# Matches the resumes.file_name column width
MAX_FILE_NAME_LENGTH = 255


class AnalysisState(str, enum.Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    PROMPTING = "prompting"
    QUERYING = "querying"
    NORMALIZING = "normalizing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@contextmanager
def scoped_upload(data: bytes, file_name: str, upload_dir: Optional[str] = None) -> Iterator[Path]:
    """Write the upload to a temp file and delete it however the block exits."""
    if upload_dir:
        os.makedirs(upload_dir, exist_ok=True)
    suffix = Path(file_name).suffix or ".pdf"
    fd, name = tempfile.mkstemp(prefix="resume-", suffix=suffix, dir=upload_dir or None)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed temporary upload %s", path)


class ResumeAnalysisService:
    """
    Sequences extractor -> prompt -> AI client -> normalizer -> store.
    Collaborators are injected; the service holds no global state.
    """

    def __init__(
        self,
        settings: Settings,
        ai_client: GeminiAnalysisClient,
        store: ResumeRecordStore,
    ):
        self.ai_client = ai_client
        self.store = store
        self.upload_dir = settings.upload_dir
        self.max_text_chars = settings.max_text_chars
        self.timeout = settings.analysis_timeout_seconds

    async def analyze(self, data: bytes, file_name: str) -> Result[ResumeRecord]:
        """Run the full pipeline for one upload."""
        logger.info("Analyzing '%s' (%d bytes)", file_name, len(data))
        if not file_name or not file_name.strip():
            return self._reject(file_name, InvalidUploadError("File name is required"))
        if len(file_name) > MAX_FILE_NAME_LENGTH:
            return self._reject(file_name, InvalidUploadError(
                f"File name is longer than {MAX_FILE_NAME_LENGTH} characters"
            ))

        with scoped_upload(data, file_name, self.upload_dir) as path:
            try:
                result = await asyncio.wait_for(self._run(path, file_name), timeout=self.timeout)
            except asyncio.TimeoutError:
                result = Err(AnalysisTimeoutError(
                    f"Resume analysis did not finish within {self.timeout}s"
                ))

        if result.ok:
            logger.info("Analysis done: id=%s file=%s", result.value.id, file_name)
        else:
            logger.warning("Analysis failed for '%s': %s: %s",
                           file_name, result.error.kind, result.error.detail)
        return result

    async def _run(self, path: Path, file_name: str) -> Result[ResumeRecord]:
        state = AnalysisState.RECEIVED

        state = self._advance(state, AnalysisState.EXTRACTING, file_name)
        # PyMuPDF is synchronous; keep it off the event loop
        text = await asyncio.to_thread(extract_text, path, max_chars=self.max_text_chars)
        if not text.ok:
            return self._fail(state, text, file_name)

        state = self._advance(state, AnalysisState.PROMPTING, file_name)
        prompt = build_analysis_prompt(text.value)

        state = self._advance(state, AnalysisState.QUERYING, file_name)
        raw = await self.ai_client.generate(prompt)
        if not raw.ok:
            return self._fail(state, raw, file_name)

        state = self._advance(state, AnalysisState.NORMALIZING, file_name)
        analysis = normalize_response(raw.value)
        if not analysis.ok:
            return self._fail(state, analysis, file_name)

        state = self._advance(state, AnalysisState.PERSISTING, file_name)
        record = await self.store.create(analysis.value, file_name)
        if not record.ok:
            return self._fail(state, record, file_name)

        self._advance(state, AnalysisState.DONE, file_name)
        return record

    @staticmethod
    def _reject(file_name: str, error: InvalidUploadError) -> Err:
        logger.warning("Upload rejected before analysis: %s", error.detail)
        return Err(error)

    @staticmethod
    def _advance(current: AnalysisState, nxt: AnalysisState, file_name: str) -> AnalysisState:
        logger.debug("[%s] %s -> %s", file_name, current.value, nxt.value)
        return nxt

    @staticmethod
    def _fail(state: AnalysisState, result: Err, file_name: str) -> Err:
        logger.debug("[%s] %s -> %s (%s)", file_name, state.value,
                     AnalysisState.FAILED.value, result.error.kind)
        return result

    async def list_summaries(self) -> Result[List[ResumeSummary]]:
        return await self.store.list_summaries()

    async def get_record(self, resume_id: int) -> Result[ResumeRecord]:
        return await self.store.get_by_id(resume_id)
