import copy
import logging
from typing import Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from story_backend.libs.llm_vision import UpstreamHTTPError
from story_backend.libs.logging_config import configure_logging
from story_backend.libs.settings import Settings, load_settings
from story_backend.orchestrator import FALLBACK_STORIES, compile_graph

logger = logging.getLogger(__name__)

SOURCE_HEADER = "X-Stories-Source"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    """Build the API. `client` overrides the OpenAI SDK client (used by tests).

    Without `settings` this is the startup path: settings come from the
    environment and logging is configured. Serve it with
    `uvicorn story_backend.app.main:create_app --factory`.
    """
    if settings is None:
        settings = load_settings()
        configure_logging(settings.log_level)

    app = FastAPI(title="Jira Story Generator API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[SOURCE_HEADER],
    )
    app.state.settings = settings
    app.state.graph = compile_graph(settings, client)

    @app.get("/")
    def root():
        return {
            "message": "Jira Story Generator API",
            "version": "1.0.0",
            "endpoints": {
                "POST /generate-stories": "Upload a UI design image (multipart field 'image') and get Jira stories",
                "GET /health": "Liveness check",
            },
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/generate-stories")
    def generate_stories(request: Request, image: Optional[UploadFile] = File(None)):
        """
        Turn an uploaded UI design image into a list of Jira stories.

        Returns:
            200 with a JSON array of stories (from the model, or the fallback set),
            400 when no image was uploaded. With STORY_FAILURE_POLICY=strict a missing
            API key gives 500 and an upstream error status is passed through.
        """
        cfg: Settings = request.app.state.settings
        if image is None or not image.filename:
            return _error(400, "No image uploaded.")
        if cfg.strict and not cfg.xai_api_key:
            return _error(500, "API key not configured.")

        try:
            image_bytes = image.file.read()
            out = request.app.state.graph.invoke({"image_bytes": image_bytes, "mime_type": image.content_type})
            return JSONResponse(out["stories"], headers={SOURCE_HEADER: out.get("source", "fallback")})
        except UpstreamHTTPError as e:
            logger.error("upstream error passed through: %s", e)
            return _error(e.status_code, e.text)
        except Exception as e:
            logger.exception("story generation failed")
            if cfg.strict:
                return _error(500, str(e))
            return JSONResponse(copy.deepcopy(FALLBACK_STORIES), headers={SOURCE_HEADER: "fallback"})

    return app


def main() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
