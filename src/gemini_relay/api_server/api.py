import logging
from typing import List, Optional

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gemini_relay import __version__
from gemini_relay.config import Settings, get_settings
from gemini_relay.constants import COMPLETION_ERROR_RESPONSE, MODELS_ERROR_RESPONSE
from gemini_relay.logging_utils import configure_logging
from gemini_relay.service import RelayService
from gemini_relay.api_server.schemas import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[RelayService] = None,
) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Settings to use, defaults to the process settings (and
            configures logging from them)
        service: Prebuilt service, defaults to one built from settings

    Returns:
        FastAPI application
    """
    if settings is None:
        # Built by the uvicorn factory, possibly in a fresh reload worker
        settings = get_settings()
        configure_logging(settings.log_level)
    service = service or RelayService.from_settings(settings)

    app = FastAPI(title="Gemini Relay", version=__version__)
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.get("/v1/models", response_model=List[str])
    async def list_models():
        try:
            return await service.list_models()
        except Exception:
            logger.exception("Error fetching models")
            return JSONResponse(status_code=500, content={"message": MODELS_ERROR_RESPONSE})

    @app.post("/v1/chat/completions", response_model=CompletionResponse)
    async def chat_completions(request: Optional[CompletionRequest] = Body(default=None)):
        try:
            return await service.generate_completion(request or CompletionRequest())
        except Exception:
            logger.exception("Error generating response")
            return JSONResponse(status_code=500, content={"message": COMPLETION_ERROR_RESPONSE})

    return app
