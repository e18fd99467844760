"""FastAPI application entrypoint for codeshift service mode."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from ..errors import ConversionError, RateLimitExceeded, ValidationError
from ..models import ConversionHistoryEntry, ConversionSuggestion
from ..session import ConverterSession
from ..validators import sanitize_html

_T = TypeVar("_T")


class HealthResponse(BaseModel):
    status: str


class LanguageModel(BaseModel):
    tag: str
    name: str
    icon: str
    family: Optional[str] = None


class LanguagesResponse(BaseModel):
    languages: List[LanguageModel]


class SuggestionModel(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    source: str
    target: str


class TextRequest(BaseModel):
    text: str


class DetectResponse(BaseModel):
    language: Optional[str] = None
    scores: Dict[str, int] = Field(default_factory=dict)


class SuggestRequest(BaseModel):
    text: str
    language: Optional[str] = None


class SuggestResponse(BaseModel):
    language: Optional[str] = None
    suggestions: List[SuggestionModel] = Field(default_factory=list)


class ConvertRequest(BaseModel):
    text: str
    target: str
    source: Optional[str] = None


class HistoryEntryModel(BaseModel):
    id: str
    conversion_label: str
    source_text: str
    result_text: str
    timestamp: datetime


class ConvertResponse(BaseModel):
    source: str
    target: str
    result: str
    entry: HistoryEntryModel


class HistoryResponse(BaseModel):
    entries: List[HistoryEntryModel]


class ClearHistoryResponse(BaseModel):
    removed: int


def _suggestion_model(suggestion: ConversionSuggestion) -> SuggestionModel:
    return SuggestionModel(
        id=suggestion.id,
        name=suggestion.name,
        description=suggestion.description,
        icon=suggestion.icon,
        source=suggestion.source,
        target=suggestion.target,
    )


def _entry_model(entry: ConversionHistoryEntry) -> HistoryEntryModel:
    return HistoryEntryModel(
        id=entry.id,
        conversion_label=entry.conversion_label,
        source_text=entry.source_text,
        result_text=entry.result_text,
        timestamp=entry.timestamp,
    )


def _entry_html(entry: ConversionHistoryEntry) -> str:
    return (
        f'<article class="conversion" data-entry="{sanitize_html(entry.id)}">\n'
        f"<h2>{sanitize_html(entry.conversion_label)}</h2>\n"
        f"<pre><code>{sanitize_html(entry.result_text)}</code></pre>\n"
        "</article>\n"
    )


async def _run_blocking(call: Callable[[], _T]) -> _T:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return call()
    return await loop.run_in_executor(None, call)


def _default_session() -> ConverterSession:
    return ConverterSession.from_path()


def create_app(
    session_factory: Callable[[], ConverterSession] = _default_session,
) -> FastAPI:
    """Create the FastAPI application exposing codeshift operations."""

    app = FastAPI(title="Codeshift Service", version="1.0.0")
    # One session per app so history and rate limits span requests.
    session = session_factory()

    async def get_session() -> ConverterSession:
        return session

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/languages", response_model=LanguagesResponse)
    async def languages(
        current: ConverterSession = Depends(get_session),
    ) -> LanguagesResponse:
        return LanguagesResponse(
            languages=[
                LanguageModel(tag=info.tag, name=info.name, icon=info.icon, family=info.family)
                for info in current.languages()
            ]
        )

    @app.post("/detect", response_model=DetectResponse)
    async def detect(
        payload: TextRequest,
        current: ConverterSession = Depends(get_session),
    ) -> DetectResponse:
        analysis = await _run_blocking(lambda: current.analyze(payload.text))
        return DetectResponse(language=analysis.language, scores=analysis.scores)

    @app.post("/suggest", response_model=SuggestResponse)
    async def suggest(
        payload: SuggestRequest,
        current: ConverterSession = Depends(get_session),
    ) -> SuggestResponse:
        if payload.language:
            language: Optional[str] = payload.language.lower()
            suggestions = current.suggest(language, payload.text)
        else:
            analysis = await _run_blocking(lambda: current.analyze(payload.text))
            language, suggestions = analysis.language, analysis.suggestions
        return SuggestResponse(
            language=language,
            suggestions=[_suggestion_model(item) for item in suggestions],
        )

    @app.post("/convert", response_model=ConvertResponse)
    async def convert(
        payload: ConvertRequest,
        current: ConverterSession = Depends(get_session),
    ) -> ConvertResponse:
        def _run_convert() -> tuple[str, Any]:
            source = payload.source
            if not source:
                source = current.analyze(payload.text).language
            if not source:
                raise ValidationError(
                    "Could not detect the source language; pass it explicitly",
                    field="source",
                )
            return source.lower(), current.convert_pair(payload.text, source, payload.target)

        source, outcome = await _run_blocking(_run_convert)
        return ConvertResponse(
            source=source,
            target=payload.target.lower(),
            result=outcome.result,
            entry=_entry_model(outcome.entry),
        )

    @app.get("/history", response_model=HistoryResponse)
    async def history(
        current: ConverterSession = Depends(get_session),
    ) -> HistoryResponse:
        return HistoryResponse(entries=[_entry_model(entry) for entry in current.history.entries()])

    @app.get("/history/{entry_id}", response_model=HistoryEntryModel)
    async def history_entry(
        entry_id: str,
        current: ConverterSession = Depends(get_session),
    ) -> HistoryEntryModel:
        entry = current.restore(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Unknown history entry: {entry_id}")
        return _entry_model(entry)

    @app.get("/history/{entry_id}/html", response_class=HTMLResponse)
    async def history_entry_html(
        entry_id: str,
        current: ConverterSession = Depends(get_session),
    ) -> HTMLResponse:
        entry = current.restore(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Unknown history entry: {entry_id}")
        return HTMLResponse(_entry_html(entry))

    @app.delete("/history", response_model=ClearHistoryResponse)
    async def clear_history(
        current: ConverterSession = Depends(get_session),
    ) -> ClearHistoryResponse:
        return ClearHistoryResponse(removed=current.clear_history())

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_: Any, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc), "field": exc.field})

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(_: Any, exc: RateLimitExceeded) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content={"detail": str(exc), "retry_after": exc.retry_after},
            headers={"Retry-After": str(max(1, int(round(exc.retry_after))))},
        )

    @app.exception_handler(ConversionError)
    async def conversion_error_handler(_: Any, exc: ConversionError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "stage": exc.stage},
        )

    return app


def run_service(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    session_factory: Callable[[], ConverterSession] = _default_session,
) -> None:  # pragma: no cover - integration path
    app = create_app(session_factory)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
