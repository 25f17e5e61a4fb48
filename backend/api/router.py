from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import AnalyzeRequest
from models.responses import AnalysisResponse
from models.schemas import PatternDefinition, RiskProfileInfo
from services import analyzer, gemini_client
from services.risk_profiles.registry import list_profiles
from services.structural.bank import get_structural_pattern_definitions

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "ai_configured": gemini_client.is_configured(),
    }


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
async def analyze(request: Request, body: AnalyzeRequest):
    return await analyzer.analyze_with_ai(body.to_facts(), use_ai=body.use_ai)


@router.post("/analyze/report", response_class=PlainTextResponse)
@limiter.limit(settings.rate_limit)
async def analyze_report(request: Request, body: AnalyzeRequest):
    result = await analyzer.analyze_with_ai(body.to_facts(), use_ai=body.use_ai)
    return PlainTextResponse(result.report)


@router.get("/patterns", response_model=list[PatternDefinition])
async def patterns():
    return get_structural_pattern_definitions()


@router.get("/profiles", response_model=list[RiskProfileInfo])
async def profiles():
    return list_profiles()
