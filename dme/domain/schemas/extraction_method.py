from enum import Enum


class Extraction_method(str, Enum):
    PATTERN = "pattern"
    LLM = "llm"
