"""Prompt template for the optional Gemini enhancement call."""

from config import settings


def _truncate(text: str, limit: int) -> str:
    return (text or "")[:limit] if isinstance(text, str) else ""


def build_enhancement_prompt(jd: str, resume: str) -> str:
    """Ask for advisory JSON only; the rule engine stays authoritative.

    Both inputs are cut to settings.ai_max_input_chars before templating.
    """
    limit = settings.ai_max_input_chars
    jd_text = _truncate(jd, limit)
    resume_text = _truncate(resume, limit)

    return f"""너는 채용 JD와 이력서를 비교해 규칙 기반 분석기를 보조하는 JSON만 출력한다.
설명이나 JSON 이외의 텍스트는 절대 출력하지 않는다.

출력 형식 (no markdown, no code fences):
{{
  "jdMustHave": [<JD의 필수 요건 키워드>],
  "jdNiceToHave": [<JD의 우대 요건 키워드>],
  "resumeSkillTags": [<이력서에서 확인되는 기술 태그>],
  "keywordSynonyms": {{"<키워드>": [<이력서에서 같은 의미로 쓰인 표현>]}},
  "requiredMajorHints": [<JD가 요구하는 전공명>],
  "candidateMajor": "<지원자 전공, 모르면 빈 문자열>",
  "detectedCompany": "<JD의 회사명, 모르면 빈 문자열>",
  "detectedRole": "<JD의 직무명, 모르면 빈 문자열>",
  "detectedIndustry": "<JD 회사의 산업, 모르면 빈 문자열>",
  "detectedCompanySizeCandidate": "<지원자 최근 회사 규모: startup|smb|mid|large, 모르면 빈 문자열>",
  "detectedCompanySizeTarget": "<지원 회사 규모: startup|smb|mid|large, 모르면 빈 문자열>",
  "fitExtract": {{
    "candidateResponsibilityLevel": <0-4 또는 null>,
    "targetResponsibilityLevel": <0-4 또는 null>,
    "candidateDecisionExposureLevel": <0-4 또는 null>,
    "candidateRoleType": "execution|coordination|unknown",
    "targetRoleType": "execution|coordination|unknown",
    "candidateBusinessModel": "platform|manufacturing|marketplace|inventory|saas|subscription|ads|unknown",
    "targetBusinessModel": "<candidateBusinessModel과 같은 값 집합>",
    "candidateReportingLine": "teamlead|director|cxo|ceo|unknown",
    "targetReportingLine": "<candidateReportingLine과 같은 값 집합>",
    "candidateOrgComplexity": "low|mid|high|unknown",
    "targetOrgComplexity": "low|mid|high|unknown",
    "candidateImpact": {{"revenue": <number 또는 null>, "users": <number 또는 null>, "projectSize": <number 또는 null>}},
    "targetImpact": {{"revenue": <number 또는 null>, "users": <number 또는 null>, "projectSize": <number 또는 null>}},
    "careerShiftRisk": "low|high|unknown",
    "noClearBridgeExperience": <true|false|null>
  }},
  "confidenceDeltaByHypothesis": {{
    "knockout-missing": <number>,
    "fit-mismatch": <number>,
    "weak-proof": <number>,
    "unclear-positioning": <number>,
    "risk-signals": <number>,
    "gap-risk": <number>
  }},
  "suggestedBullets": [{{"before": "<원문>", "after": "<개선문>", "why": "<이유>"}}],
  "conflicts": [{{"type": "<유형>", "evidence": "<근거>", "explanation": "<설명>", "fix": "<대응>"}}]
}}

제약:
- 키워드, 태그, 전공 힌트 문자열은 모두 소문자
- confidenceDeltaByHypothesis 값은 -0.15 ~ +0.15 범위
- suggestedBullets, conflicts는 각각 최대 8개
- fitExtract는 판단하지 말고 텍스트에서 확인되는 사실만 추출, 근거가 없으면 null 또는 unknown

[JD]
{jd_text}

[RESUME]
{resume_text}
"""
