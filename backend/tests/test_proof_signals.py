import pytest

from services.proof_signals import build_resume_signals, count_numeric_proof, proof_score


def test_number_with_achievement_context_qualifies():
    raw, qualified, notes = count_numeric_proof("매출 18% 증가")
    assert raw == 1
    assert qualified == 1
    assert notes == []


def test_number_without_context_is_rejected_with_note():
    raw, qualified, notes = count_numeric_proof("근무 기간 12개월")
    assert raw == 1
    assert qualified == 0
    assert len(notes) == 1
    assert "12개월" in notes[0]


def test_english_context():
    raw, qualified, _ = count_numeric_proof("Reduced cost by 1,200 USD")
    assert raw == 1
    assert qualified == 1


def test_empty_or_non_string():
    assert count_numeric_proof("") == (0, 0, [])
    assert count_numeric_proof(None) == (0, 0, [])


@pytest.mark.parametrize(
    "qualified, expected",
    [(0, 0.35), (1, 0.5), (2, 0.5), (3, 0.7), (5, 0.7), (6, 0.85), (20, 0.85)],
)
def test_proof_score_steps(qualified, expected):
    assert proof_score(qualified) == expected


def test_resume_and_portfolio_are_combined():
    rs = build_resume_signals("리드타임 3일 단축", "전환율 2.5% 개선, 원가 1,200만원 절감")
    assert rs.proof_count >= 3
    assert rs.proof_count_raw >= rs.proof_count
    assert rs.resume_signal_score == 0.7


def test_notes_are_capped():
    text = " / ".join(f"항목 {i}개월" for i in range(1, 10))
    rs = build_resume_signals(text)
    assert rs.proof_count == 0
    assert len(rs.proof_notes) == 5
    assert rs.resume_signal_score == 0.35
