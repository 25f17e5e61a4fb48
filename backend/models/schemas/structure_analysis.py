"""Company-size, vendor, ownership and industry fit read from raw text."""

from typing import Literal

from pydantic import BaseModel

CompanySize = Literal["startup", "smb", "mid", "large", ""]


class RoleInference(BaseModel):
    role: str = ""  # best rule from the role dictionary, or the caller's fallback
    score: int = 0  # strong +3, weak +1, negative -2; below 3 means not confident


class StructureAnalysis(BaseModel):
    """All scores are 0-100. 50-55 means no usable signal."""
    company_size_fit_score: int = 50
    vendor_experience_score: int = 50
    ownership_level_score: int = 55
    industry_structure_fit_score: int = 50
    flags: list[str] = []
    resume_industry: str = ""
    jd_industry: str = ""
    candidate_company_size: CompanySize = ""
    target_company_size: CompanySize = ""
    ownership_hits: list[str] = []
    role_inference: RoleInference = RoleInference()
    summary: str = ""
