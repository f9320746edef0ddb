"""FastAPI web service for Tiptap JSON to HTML conversion.

Endpoints::

    POST /convert       Upload a .json file and receive HTML back.
    POST /convert/json  Send the document as the JSON body, receive HTML.
    POST /tree          Send the document as the JSON body, receive the
                        mark-nested node tree as JSON.
    GET  /health        Health check.

Run::

    uvicorn tiptap2html.server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from typing import Any

from fastapi import Body, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse

from tiptap2html import __version__
from tiptap2html.config import ConversionOptions
from tiptap2html.converter import Converter
from tiptap2html.exceptions import Tiptap2HtmlError

app = FastAPI(
    title="tiptap2html",
    description="Tiptap JSON to HTML conversion service",
    version=__version__,
)


def _convert(document: Any, options: ConversionOptions) -> str:
    try:
        return Converter(options).convert(document)
    except Tiptap2HtmlError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/convert", response_class=HTMLResponse)
async def convert_file(
    file: UploadFile = File(...),
    offset_headings: int = Form(0),
    allow_html: bool = Form(False),
    smartypants: bool = Form(False),
    encoding: str = Form("utf-8"),
) -> HTMLResponse:
    """Upload a Tiptap JSON file and receive HTML back.

    - **file**: Tiptap document (.json)
    - **offset_headings**: Shift heading levels by this amount
    - **allow_html**: Emit HTML inside text nodes unescaped
    - **smartypants**: Apply smart punctuation
    - **encoding**: Source file encoding
    """
    raw = await file.read()
    try:
        json_text = raw.decode(encoding)
    except (LookupError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=400, detail=f"Cannot decode upload: {exc}") from exc

    options = ConversionOptions(
        offset_headings=offset_headings,
        allow_html=allow_html,
        smartypants=smartypants,
    )
    return HTMLResponse(content=_convert(json_text, options))


@app.post("/convert/json", response_class=HTMLResponse)
async def convert_json(
    document: dict[str, Any] = Body(...),
    offset_headings: int = 0,
    allow_html: bool = False,
    inline: bool = False,
    smartypants: bool = False,
) -> HTMLResponse:
    """Send a Tiptap document as the request body and receive HTML.

    Options are passed as query parameters.
    """
    options = ConversionOptions(
        offset_headings=offset_headings,
        allow_html=allow_html,
        inline=inline,
        smartypants=smartypants,
    )
    return HTMLResponse(content=_convert(document, options))


@app.post("/tree")
async def tree(
    document: dict[str, Any] = Body(...),
    offset_headings: int = 0,
    inline: bool = False,
) -> dict[str, Any]:
    """Return the mark-nested node tree for a Tiptap document."""
    options = ConversionOptions(offset_headings=offset_headings, inline=inline)
    try:
        return Converter(options).build_tree(document).to_dict()
    except Tiptap2HtmlError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
