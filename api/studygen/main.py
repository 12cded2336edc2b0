import logging
from typing import Dict, Optional

import httpx
from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studygen.core.config import settings
from studygen.core.llm_client import has_usable_key, list_models
from studygen.core.logging import setup_logging
from studygen.ingestion.parser import document_text, parse_file
from studygen.schemas.study import (
    AptitudeCategory,
    AudioSummaryRequest,
    AudioSummaryResponse,
    Difficulty,
    GenerateRequest,
    GradeRequest,
    LanguagesRequest,
    LanguagesResponse,
    OfflineGradeResult,
    OfflineQuestionsResponse,
    StudyMaterial,
)
from studygen.studio.service import StudyMaterialService

setup_logging(settings.log_level)
logger = logging.getLogger("api")

app = FastAPI(
    title="Study Material API",
    version="0.1.0",
    description="Flashcards, quizzes and speech-ready summaries from a topic, with offline fallbacks.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.otel_enabled:
    from studygen.observability.otel import setup_otel

    setup_otel(app)


@app.on_event("startup")
async def _startup() -> None:
    app.state.service = StudyMaterialService(settings)
    logger.info(
        "study service ready model=%s base_url=%s key_configured=%s",
        settings.llm_model,
        settings.llm_base_url,
        has_usable_key(settings),
    )


def get_service(request: Request) -> StudyMaterialService:
    return request.app.state.service


@app.get("/")
async def root() -> Dict[str, str]:
    return {"message": "Study Material API is running. See /docs, /health, /study/generate."}


@app.get("/health")
async def health(service: StudyMaterialService = Depends(get_service)) -> JSONResponse:
    s = service.settings
    async with httpx.AsyncClient() as client:
        llm = await list_models(client, s)

    status = "ok" if llm["ok"] else "degraded"
    payload = {
        "status": status,
        "env": s.app_env,
        "llm": {**llm, "model": s.llm_model, "key_configured": has_usable_key(s)},
        # generation still answers from fallback content while degraded
        "fallback_available": True,
    }
    code = 200 if status == "ok" else 503
    logger.info("health status=%s llm_ok=%s", status, llm["ok"])
    return JSONResponse(content=payload, status_code=code)


@app.post("/study/generate", response_model=StudyMaterial)
async def generate_study_material(
    req: GenerateRequest, service: StudyMaterialService = Depends(get_service)
) -> StudyMaterial:
    return await service.generate_flashcards(
        req.topic, source_content=req.source_content, audio_language=req.audio_language
    )


@app.post("/study/generate/upload", response_model=StudyMaterial)
async def generate_from_upload(
    topic: str = Form(..., min_length=1, max_length=200),
    file: UploadFile = File(...),
    audio_language: str = Form(default=""),
    service: StudyMaterialService = Depends(get_service),
) -> StudyMaterial:
    """
    Upload a PDF/TXT/MD document; its text becomes the source content.
    """
    if not topic.strip():
        raise HTTPException(status_code=400, detail="Topic is empty")
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename missing")

    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(raw) > service.settings.max_upload_bytes:
        raise HTTPException(status_code=400, detail="File too large")

    try:
        mime_type, pages = parse_file(file.filename, raw)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    source = document_text(pages)
    logger.info(
        "upload parsed name=%s mime=%s pages=%s chars=%s", file.filename, mime_type, len(pages), len(source)
    )
    return await service.generate_flashcards(
        topic, source_content=source or None, audio_language=audio_language or None
    )


@app.post("/speech/audio-summary", response_model=AudioSummaryResponse)
async def audio_summary(
    req: AudioSummaryRequest, service: StudyMaterialService = Depends(get_service)
) -> AudioSummaryResponse:
    return AudioSummaryResponse(text=service.generate_audio_summary(req.text, req.language))


@app.post("/speech/languages", response_model=LanguagesResponse)
async def speech_languages(
    req: LanguagesRequest, service: StudyMaterialService = Depends(get_service)
) -> LanguagesResponse:
    return LanguagesResponse(languages=service.get_available_languages(req.voices))


@app.get("/offline/aptitude", response_model=OfflineQuestionsResponse)
async def offline_aptitude(
    category: Optional[AptitudeCategory] = Query(default=None),
    difficulty: Optional[Difficulty] = Query(default=None),
    service: StudyMaterialService = Depends(get_service),
) -> OfflineQuestionsResponse:
    questions = service.get_offline_aptitude_questions(category, difficulty)
    return OfflineQuestionsResponse(count=len(questions), questions=questions)


@app.post("/offline/aptitude/grade", response_model=OfflineGradeResult)
async def grade_offline_aptitude(
    req: GradeRequest, service: StudyMaterialService = Depends(get_service)
) -> OfflineGradeResult:
    try:
        return service.grade_offline_answers(req.answers, req.category, req.difficulty)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

