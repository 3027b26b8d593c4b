import hashlib
import io
from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Query
from .errors import KernelHelperError
from .loader import decode_source, load_kernel
from .models import ConvertOptions, ConvertResponse, HealthResponse, LoadResponse
from .rules import MAX_BUFFER_SIZE
from .transform import convert_text

app = FastAPI(
    title="kernel-helper",
    description="Reformat kernel sources into paste-able string literals",
    version="1.0.0",
)


def _sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


async def _read_upload(file: UploadFile):
    if not file.filename:
        raise HTTPException(status_code=422, detail="A kernel file is required")
    return decode_source(await file.read())


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/convert", response_model=ConvertResponse)
async def convert_kernel(
    file: UploadFile = File(...),
    include_blank_lines: bool = False,
    max_line_length: Optional[int] = Query(default=MAX_BUFFER_SIZE, ge=0, description="Line buffer size including the newline, 0 for no limit"),
    require_trailing_newline: bool = False,
):
    if max_line_length == 1:
        raise HTTPException(status_code=422, detail="max_line_length must be 0 or at least 2")

    text, encoding = await _read_upload(file)
    options = ConvertOptions(
        include_blank_lines=include_blank_lines,
        max_line_length=max_line_length or None,
        require_trailing_newline=require_trailing_newline,
    )

    try:
        converted, report = convert_text(text, options)
    except KernelHelperError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return {
        "converted": {
            "sha256": _sha256_hex(converted),
            "encoding": encoding,
            "content": converted,
        },
        "report": report.model_dump(),
    }


@app.post("/load", response_model=LoadResponse)
async def load_kernel_upload(file: UploadFile = File(...)):
    raw_text, encoding = await _read_upload(file)
    text = load_kernel(io.StringIO(raw_text, newline="\n"), len(raw_text))
    return {
        "sha256": _sha256_hex(text),
        "encoding": encoding,
        "length": len(text),
        "content": text,
    }
