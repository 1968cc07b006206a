from __future__ import annotations

import io
from typing import Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field, validator

from bf2c.bf_interpreter import BrainfuckInterpreter, StepLimitExceeded, UnbalancedLoopError
from bf2c.translator import BrainfuckTranslator, TranslationReport

DEFAULT_PREVIEW_STEPS = 1_000_000
MAX_PREVIEW_STEPS = 10_000_000


def _string_to_input_bytes(data: str) -> list[int]:
    return list(data.encode("latin-1"))


class TranslateRequest(BaseModel):
    code: str = ""


class TranslateResponse(BaseModel):
    c_code: str
    statements: int
    depth: int
    balanced: bool


class PreviewRequest(BaseModel):
    code: str = ""
    input: str = ""
    max_steps: int = Field(default=DEFAULT_PREVIEW_STEPS, ge=1, le=MAX_PREVIEW_STEPS)

    @validator("input")
    def validate_input(cls, value: str) -> str:
        try:
            value.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError("input must contain single-byte characters only") from exc
        return value


class PreviewResponse(BaseModel):
    output: str
    steps: int


def create_app(translator: Optional[BrainfuckTranslator] = None) -> FastAPI:
    bf_translator = translator or BrainfuckTranslator()
    app = FastAPI(title="bf2c API", version="0.1.0")

    @app.post("/api/translate", response_model=TranslateResponse)
    def translate(payload: TranslateRequest) -> TranslateResponse:
        sink = io.StringIO()
        report: TranslationReport = bf_translator.translate(io.StringIO(payload.code), sink)
        return TranslateResponse(
            c_code=sink.getvalue(),
            statements=report.statements,
            depth=report.depth,
            balanced=report.balanced,
        )

    @app.post("/api/preview", response_model=PreviewResponse)
    def preview(payload: PreviewRequest) -> PreviewResponse:
        interpreter = BrainfuckInterpreter()
        try:
            result = interpreter.run(
                payload.code,
                input_data=_string_to_input_bytes(payload.input),
                max_steps=payload.max_steps,
            )
        except StepLimitExceeded as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc
        except (UnbalancedLoopError, IndexError) as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(exc),
            ) from exc
        return PreviewResponse(output=result.output.decode("latin-1"), steps=result.steps)

    return app


__all__ = ["create_app"]
