"""
code-stopper - Editor shell with a per-keystroke syntax gate
FastAPI application exposing line validation and editor sessions
"""
import asyncio
from typing import Optional, Set
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from loguru import logger

from config import settings
from code_stopper import (
    EDITOR_LANGUAGES,
    EditorSession,
    Language,
    StopperConfig,
    __version__,
    validate,
)
from explain_client import ExplainerBadResponse, ExplainerNotConfigured, error_explainer


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("code-stopper starting up...")
    yield
    logger.info("code-stopper shutting down...")
    await error_explainer.close()


app = FastAPI(
    title="code-stopper",
    description="Multi-language editor shell with a per-keystroke syntax gate",
    version=__version__,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Pydantic Models ---

class ValidateRequest(BaseModel):
    line: str
    language: str

class ValidateResponse(BaseModel):
    valid: bool
    message: Optional[str] = None

class ExplainRequest(BaseModel):
    code: str = ""
    error: str
    language: str
    line_number: Optional[int] = None

class ExplainResponse(BaseModel):
    explanation: str


def stopper_config() -> StopperConfig:
    """Fresh controller settings for a new editor"""
    return StopperConfig(
        enabled=settings.stopper_enabled,
        banner_timeout=settings.banner_timeout,
    )


# --- API Endpoints ---

@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve a minimal editor page wired to the editor WebSocket"""
    return """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>code-stopper</title>
    <style>
        body { font-family: monospace; background: #1e1e1e; color: #ddd; padding: 20px; }
        pre { background: #111; padding: 15px; min-height: 300px; outline: none; }
        #banner { background: #a33; color: #fff; padding: 8px; display: none; }
        #banner.active { display: block; }
    </style>
</head>
<body>
    <select id="language"></select>
    <label><input type="checkbox" id="enabled" checked> Code Stopper</label>
    <div id="banner"></div>
    <pre id="editor" tabindex="0"></pre>
    <script>
        const editor = document.getElementById('editor');
        const banner = document.getElementById('banner');
        const picker = document.getElementById('language');
        let ws;

        function connect(language) {
            if (ws) ws.close();
            ws = new WebSocket(`ws://${location.host}/ws/editor?language=${language}`);
            ws.onmessage = (event) => {
                const msg = JSON.parse(event.data);
                if (msg.type === 'state') {
                    editor.textContent = msg.text;
                    const stopper = msg.stopper;
                    banner.textContent = stopper.banner_message || '';
                    banner.classList.toggle('active', stopper.banner_visible);
                } else if (msg.type === 'banner_cleared') {
                    banner.classList.remove('active');
                }
            };
        }

        fetch('/api/languages').then(r => r.json()).then(data => {
            for (const lang of data.languages) {
                picker.add(new Option(`${lang.icon} ${lang.name}`, lang.id));
            }
            connect(picker.value);
        });
        picker.onchange = () => connect(picker.value);
        document.getElementById('enabled').onchange = (e) =>
            ws.send(JSON.stringify({type: 'set_enabled', enabled: e.target.checked}));
        editor.onkeydown = (e) => {
            e.preventDefault();
            ws.send(JSON.stringify({type: 'key', key: e.key, shift: e.shiftKey}));
        };
    </script>
</body>
</html>
"""


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "code-stopper",
        "version": __version__,
        "explainer_configured": error_explainer.configured,
    }


@app.get("/api/languages")
async def list_languages():
    """
    Languages offered by the editor, and every tag the validator knows
    """
    return {
        "languages": [config.to_dict() for config in EDITOR_LANGUAGES],
        "validated_languages": [language.value for language in Language],
    }


@app.post("/api/validate", response_model=ValidateResponse)
async def validate_line(request: ValidateRequest):
    """
    Validate a single line; unknown languages are always valid
    """
    verdict = validate(request.line, request.language)
    return ValidateResponse(valid=verdict.valid, message=verdict.message)


@app.post("/api/explain-error", response_model=ExplainResponse)
async def explain_error(request: ExplainRequest):
    """
    Explain a rejected line with the configured chat model
    """
    if not request.error:
        raise HTTPException(status_code=400, detail="No error message provided")
    try:
        explanation = await error_explainer.explain(
            code=request.code,
            error=request.error,
            language=request.language,
            line_number=request.line_number,
        )
        return ExplainResponse(explanation=explanation)
    except ExplainerNotConfigured as e:
        logger.warning(f"Explain error unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))
    except (httpx.HTTPError, ExplainerBadResponse) as e:
        logger.error(f"Explain error upstream failure: {e}")
        raise HTTPException(status_code=502, detail="Failed to explain error")


@app.websocket("/ws/editor")
async def websocket_editor(websocket: WebSocket, language: str = "python"):
    """
    WebSocket endpoint hosting one editor session per connection
    """
    await websocket.accept()

    background: Set[asyncio.Task] = set()
    handling = False

    def on_dismiss():
        # Dismissals during a message are covered by the state reply
        if handling:
            return
        task = asyncio.create_task(websocket.send_json({"type": "banner_cleared"}))
        background.add(task)
        task.add_done_callback(background.discard)

    session = EditorSession.create(
        language=language,
        config=stopper_config(),
        on_dismiss=on_dismiss,
    )

    try:
        await websocket.send_json({"type": "state", **session.to_dict()})
        while True:
            message = await websocket.receive_json()
            handling = True
            try:
                kind = message.get("type") if isinstance(message, dict) else None

                if kind == "key":
                    result = session.press_key(
                        str(message.get("key", "")),
                        shift=bool(message.get("shift", False)),
                    )
                    if result.rejected is not None:
                        await websocket.send_json({"type": "rejected", **result.rejected.to_dict()})
                elif kind == "set_text":
                    session.set_text(str(message.get("text", "")))
                elif kind == "set_language":
                    session.set_language(message.get("language"))
                elif kind == "set_enabled":
                    session.stopper.set_enabled(bool(message.get("enabled", True)))
                else:
                    await websocket.send_json({
                        "type": "error",
                        "message": f"Unknown message type: {kind!r}"
                    })
                    continue

                await websocket.send_json({"type": "state", **session.to_dict()})
            finally:
                handling = False

    except WebSocketDisconnect:
        logger.info(f"Editor session {session.id} disconnected")
    except Exception as e:
        logger.error(f"Editor WebSocket error: {e}")
        await websocket.close()
    finally:
        session.close()
        for task in background:
            task.cancel()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
