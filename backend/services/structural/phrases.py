"""Static phrase tables for the structural pattern bank.

Entries are plain substrings matched against lower-cased text, or
compiled patterns where a bare substring would over-match (short ASCII
words such as "si" or "own").
"""

import re

Phrase = str | re.Pattern

OWNERSHIP_WEAK: tuple[Phrase, ...] = (
    "참여", "지원", "보조", "서포트", "assist", "support", "help", "수행", "담당", "기여",
)

OWNERSHIP_STRONG: tuple[Phrase, ...] = (
    "기획", "리드", "주도", "설계", "결정", "책임", "총괄", "오너십", "개선", "구축",
    "런칭", "도입", "전환", "정의",
    "lead", re.compile(r"(?<![a-z])own(s|ed|ing)?(?![a-z])"), "design", "launch", "implement",
)

IMPACT_VERBS: tuple[Phrase, ...] = (
    "개선", "증가", "감소", "절감", "최적화", "향상", "개편",
    "growth", "increase", "decrease", "optimiz", "improv", "save",
)

DECISION_VERBS: tuple[Phrase, ...] = ("의사결정", "결정", "판단", "승인", "approve", "decid")

INITIATION_VERBS: tuple[Phrase, ...] = (
    "제안", "발의", "기획", "시작", "런칭", "신설", "제작",
    "proposal", "initiat", "launch", "start",
)

TEAM_SIGNALS: tuple[Phrase, ...] = (
    "팀", "협업", "co-work", "collab", "cross", "stakeholder", "유관",
)

SOLO_SIGNALS: tuple[Phrase, ...] = ("혼자", "단독", "1인", "solo", "alone")

HEDGE_PHRASES: tuple[Phrase, ...] = (
    "것 같습니다", "같아요", "아마", "어느 정도", "가능할 것", "해보겠습니다",
)

LOW_CONFIDENCE_PHRASES: tuple[Phrase, ...] = (
    "도와드릴 수", "노력하겠습니다", "열심히 하겠습니다", "배우겠습니다", "배우러", "성실히",
)

RESPONSIBILITY_AVOIDANCE_PHRASES: tuple[Phrase, ...] = (
    "상황상", "어쩔 수 없이", "지시에 따라", "시키는 대로", "윗선의 결정", "제 책임은 아니",
    "as instructed", "was told to", "not my responsibility",
)

BUZZWORDS: tuple[Phrase, ...] = (
    "혁신", "열정", "성장", "도전", "최고", "최상", "비전", "핵심", "글로벌", "선도", "탁월",
    "amazing", "world-class",
)

GENERIC_SELF_INTRO_PHRASES: tuple[Phrase, ...] = (
    "비빔밥 같은", "맥가이버", "열정적인 사람", "성실한 사람", "도전하는 사람", "긍정적인 사람",
)

VAGUE_RESPONSIBILITY_PHRASES: tuple[Phrase, ...] = (
    "업무 수행", "관련 업무", "업무 전반", "업무 지원", "기타 업무",
    re.compile(r"(?<![가-힣])등(?![가-힣])"),
)

VENDOR_SIGNALS: tuple[Phrase, ...] = (
    re.compile(r"(?<![a-z0-9])si(?![a-z0-9])"),
    "협력사", "외주", "파견", "도급", "용역", "vendor", "outsourcing", "subcontract",
)

# Matched per sentence
PASSIVE_MARKERS: tuple[Phrase, ...] = (
    "되었", "됐", "되어", "받았", "진행되", "수행되",
    re.compile(r"\b(was|were|been|being)\s+\w+ed\b"),
)

WEAK_ASSERTION_MARKERS: tuple[Phrase, ...] = (
    "기여", "도움이 되", "일조", "것 같", "노력",
    "contributed", "helped", "assisted", "tried to",
)

PROCESS_ONLY_NEEDLES: tuple[str, ...] = ("진행", "수행", "관리", "운영", "프로세스")

DECISION_EVIDENCE_NEEDLES: tuple[str, ...] = ("의사결정", "결정", "판단", "approve", "decide")

INITIATION_EVIDENCE_NEEDLES: tuple[str, ...] = ("제안", "발의", "런칭", "신설", "proposal", "initiat")

REQUIRED_LINE_MARKERS: tuple[str, ...] = ("필수", "required", "자격요건", "요구사항", "must", "mandatory")

REQUIRED_STOP_TOKENS: frozenset[str] = frozenset({
    *REQUIRED_LINE_MARKERS,
    "우대", "preferred", "사항", "경험", "가능", "능력", "이상", "이하", "업무", "관련", "전공", "학력",
})

REQUIRED_GENERIC_TOKENS: frozenset[str] = frozenset({
    "커뮤니케이션", "협업", "문제해결", "성실", "책임감", "열정", "도전", "성장", "긍정", "기획", "운영",
})

EDUCATION_RANK: dict[str, int] = {
    "highschool": 1, "associate": 2, "bachelor": 3, "master": 4, "phd": 5,
}

# ASCII forms are wrapped in word boundaries, Korean forms are not
DEGREE_PATTERNS: dict[str, tuple[list[str], list[str]]] = {
    "phd": (
        [r"ph\.?d", r"doctorate", r"doctoral", r"doctor of philosophy"],
        [r"박사"],
    ),
    "master": (
        [r"m\.?sc\.?", r"m\.?tech", r"mba", r"m\.?eng", r"master(?:'?s)?"],
        [r"석사"],
    ),
    "bachelor": (
        [r"b\.?sc\.?", r"b\.?tech", r"b\.?eng", r"bachelor(?:'?s)?"],
        [r"(?<!전문)학사", r"대학교\s*졸업", r"(?<!초)대졸"],
    ),
    "associate": (
        [r"associate(?:'?s)? degree"],
        [r"전문학사", r"전문대", r"초대졸"],
    ),
    "highschool": (
        [r"high\s*school"],
        [r"고등학교\s*졸업", r"고졸"],
    ),
}

RESUME_DEGREE_COMPILED: dict[str, re.Pattern] = {}
for _level, (_ascii, _korean) in DEGREE_PATTERNS.items():
    _parts = [rf"\b(?:{'|'.join(_ascii)})\b", *_korean]
    RESUME_DEGREE_COMPILED[_level] = re.compile("|".join(_parts), re.IGNORECASE)

# Order matters: check highest first
DEGREE_PRIORITY = ["phd", "master", "bachelor", "associate", "highschool"]

JD_EDUCATION_NOT_REQUIRED_RE = re.compile(r"(학력\s*무관|학력\s*제한\s*없|no\s+degree\s+required)", re.IGNORECASE)

JD_EDUCATION_REQUIREMENT_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("phd", re.compile(r"(박사\s*(학위\s*)?(이상|필수|소지)|ph\.?d\.?\s*(is\s+)?required)", re.IGNORECASE)),
    ("master", re.compile(
        r"(석사\s*(학위\s*)?(이상|필수|소지)|master'?s?\s*(degree\s*)?(is\s+)?(required|or\s+higher))", re.IGNORECASE)),
    ("bachelor", re.compile(
        r"((?<!전문)학사\s*(학위\s*)?(이상|필수|소지)|(?<!초)대졸\s*이상|4년제|"
        r"bachelor'?s?\s*(degree\s*)?(is\s+)?(required|or\s+higher))", re.IGNORECASE)),
    ("associate", re.compile(r"(전문학사\s*이상|초대졸\s*이상|associate'?s?\s+degree\s+required)", re.IGNORECASE)),
    ("highschool", re.compile(r"(고졸\s*이상|high\s*school\s+diploma\s+required)", re.IGNORECASE)),
)
