from .text_extractor import extract_text, clean_text
from .prompts import build_analysis_prompt, PROMPT_SCHEMA_VERSION
from .ai_client import GeminiAnalysisClient
from .normalizer import normalize_response, normalize_payload, strip_code_fences
from .resume_store import ResumeRecordStore
from .analysis import ResumeAnalysisService, AnalysisState, scoped_upload

__all__ = [
    # Extraction
    "extract_text",
    "clean_text",
    # Prompting
    "build_analysis_prompt",
    "PROMPT_SCHEMA_VERSION",
    # AI
    "GeminiAnalysisClient",
    # Normalization
    "normalize_response",
    "normalize_payload",
    "strip_code_fences",
    # Persistence
    "ResumeRecordStore",
    # Pipeline
    "ResumeAnalysisService",
    "AnalysisState",
    "scoped_upload",
]
