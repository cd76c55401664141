# ============================================================================
# src/geriatric_case/core/record.py
# ============================================================================
"""
Value types passed between the extractor, prompt builder and exporters.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

# Original form/JSON keys accepted alongside the Python field names
FIELD_ALIASES = {
    'age_sex': 'ageSex',
    'raw_text': 'rawText',
    'ai_response': 'aiResponse',
}


def read_field(data: Any, name: str) -> Any:
    """
    Read a field from a record, dataclass or mapping.

    Mappings may use either the snake_case name or its camelCase alias.
    Missing fields read as None.
    """
    if data is None:
        return None
    if isinstance(data, dict):
        if name in data:
            return data[name]
        alias = FIELD_ALIASES.get(name)
        return data.get(alias) if alias else None
    return getattr(data, name, None)


@dataclass(frozen=True)
class ClinicalRecord:
    """Fields pulled out of one raw-text blob. None means no match."""
    age_sex: Optional[str] = None
    hpi: Optional[str] = None
    meds: Optional[str] = None
    labs: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)

    def is_empty(self) -> bool:
        return not any((self.age_sex, self.hpi, self.meds, self.labs))


@dataclass(frozen=True)
class PromptRequest:
    """Prompt input: structured fields plus the raw text fallback channel."""
    age_sex: Optional[str] = None
    hpi: Optional[str] = None
    meds: Optional[str] = None
    raw_text: Optional[str] = None
    template: Optional[str] = None

    @classmethod
    def from_record(
        cls,
        record: ClinicalRecord,
        raw_text: Optional[str] = None,
        template: Optional[str] = None
    ) -> "PromptRequest":
        return cls(
            age_sex=record.age_sex,
            hpi=record.hpi,
            meds=record.meds,
            raw_text=raw_text,
            template=template,
        )


@dataclass
class ValidationResult:
    """Outcome of validate_prompt_data()."""
    is_valid: bool
    missing: List[str] = field(default_factory=list)
    message: str = ''
    using_raw_text: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CaseExport:
    """Everything the PPTX and DOC exporters render."""
    age_sex: str = ''
    initials: str = ''
    hpi: str = ''
    meds: str = ''
    ai_response: str = ''

    @classmethod
    def from_data(cls, data: Any) -> "CaseExport":
        """Build from a mapping or record; None and non-strings become ''."""
        values = {}
        for name in ('age_sex', 'initials', 'hpi', 'meds', 'ai_response'):
            value = read_field(data, name)
            values[name] = value if isinstance(value, str) else ''
        return cls(**values)
