from pydantic import Field

from config import settings
from models.schemas.input_facts import InputFacts

_MAX = settings.max_text_chars


class AnalyzeRequest(InputFacts):
    """Input facts plus the opt-in switch for the AI enhancement call."""
    jd: str = Field("", max_length=_MAX, description="Job description text")
    resume: str = Field("", max_length=_MAX, description="Plain text resume content")
    portfolio: str = Field("", max_length=_MAX)
    interview_notes: str = Field("", max_length=_MAX)
    use_ai: bool = False

    def to_facts(self) -> InputFacts:
        return InputFacts.model_validate(self.model_dump(exclude={"use_ai"}))
