"""
Small FastAPI target for exercising the probe without a real API.

Endpoints
---------
* ``GET  /ok``            – ``{}``
* ``GET  /delay/{ms}``    – sleeps *ms* milliseconds, then ``{"delay_ms": ms}``
* ``GET  /text``          – plain-text body (not JSON)
* ``GET  /status/{code}`` – JSON body with the given status code
* ``GET  /headers``       – the request headers as a JSON object
* ``POST /echo``          – returns the JSON request body unchanged

Needs the ``echo`` (or ``test``) extra for FastAPI.
Serve it with ``uvicorn latency_probe.echo_server:app`` or mount it into httpx
with ``httpx.ASGITransport(app=app)``.
"""

from __future__ import annotations

from asyncio import sleep
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

app = FastAPI(title="latency-probe echo server")


@app.get("/ok")
async def ok() -> dict:
    return {}


@app.get("/delay/{ms}")
async def delay(ms: int) -> dict:
    await sleep(ms / 1000)
    return {"delay_ms": ms}


@app.get("/text", response_class=PlainTextResponse)
async def text() -> str:
    return "plain text, not json"


@app.get("/status/{code}")
async def status(code: int) -> JSONResponse:
    return JSONResponse({"status": code}, status_code=code)


@app.post("/echo")
async def echo(request: Request) -> Any:
    return await request.json()


@app.get("/headers")
async def headers(request: Request) -> dict:
    return dict(request.headers)
