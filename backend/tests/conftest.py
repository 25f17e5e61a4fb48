"""Shared test configuration, sample facts and pytest markers."""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "fuzz: randomized property test over many generated fact sets (slow)"
    )
    config.addinivalue_line(
        "markers", "ai: exercises the optional Gemini enhancement path (client is stubbed)"
    )


SCENARIO_JD = "3년 이상 경력, SQL 필수, React 우대"
SCENARIO_RESUME = "SQL을 활용한 분석 경험 2건"


@pytest.fixture
def scenario_state() -> dict:
    return {
        "jd": SCENARIO_JD,
        "resume": SCENARIO_RESUME,
        "career": {"totalYears": 1, "gapMonths": 0, "jobChanges": 0, "lastTenureMonths": 0},
        "stage": "서류",
    }


@pytest.fixture
def rich_state() -> dict:
    """A fuller application that exercises most detectors and profiles."""
    return {
        "company": "한빛테크",
        "role": "백엔드 개발자",
        "appliedAt": "2026-09-01",
        "stage": "1차 면접",
        "jd": (
            "한빛테크 백엔드 개발자 채용\n"
            "자격요건: Python, SQL, Docker 필수\n"
            "우대사항: AWS, Kubernetes 경험\n"
            "학사 이상"
        ),
        "resume": (
            "백엔드 개발자로 Python과 SQL 기반 API를 개발했습니다. "
            "결제 서비스 응답 속도를 35% 개선했습니다. "
            "팀 프로젝트에 참여해 배포 자동화를 지원했습니다. "
            "관련 업무 전반을 담당했습니다. "
            "컴퓨터공학 학사 졸업."
        ),
        "career": {"totalYears": 4, "gapMonths": 7, "jobChanges": 3, "lastTenureMonths": 10},
        "selfCheck": {"coreFit": 4, "proofStrength": 2, "roleClarity": 3, "storyConsistency": 3, "riskSignals": 2},
        "careerHistory": [
            {"startDate": "2019-01", "endDate": "2019-08", "industry": "커머스", "employmentType": "정규직"},
            {"startDate": "2019-10", "endDate": "2020-06", "industry": "금융", "employmentType": "정규직"},
            {"startDate": "2020-08", "endDate": "2021-05", "industry": "게임", "employmentType": "정규직"},
        ],
    }
