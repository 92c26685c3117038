"""FastAPI main application."""
import logging
from typing import AsyncIterator, Optional
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from budgetai.adapters.base import TextSource
from budgetai.adapters.factory import get_text_source
from budgetai.config import settings
from budgetai.errors import IngestionError, StructuralMismatchError
from budgetai.logging_config import configure_logging
from budgetai.models.analysis import AnalysisRecord
from budgetai.models.chat import AnalysisRequest, ChatRequest
from budgetai.services.analysis import AnalysisService
from budgetai.services.chat import ChatService

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)

STRUCTURE_ERROR_NOTICE = "[Error: Unexpected response structure]"


def get_source() -> Optional[TextSource]:
    """Text source for the configured model, or None when it is not configured."""
    try:
        return get_text_source(settings.ai_model)
    except ValueError as e:
        logger.error("AI source unavailable: %s", e)
        return None


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": "1.0.0"}


@app.post("/ai/chat/stream")
async def stream_chat(request: ChatRequest, source: Optional[TextSource] = Depends(get_source)):
    """
    Stream the model's answer to a finance question as plain text.

    Rejected prompts and upstream problems show up inline as bracketed notices.
    """
    chat_service = ChatService(source)

    async def fragments() -> AsyncIterator[str]:
        try:
            async for fragment in chat_service.stream_message(
                request.prompt, request.transactions, request.budgets
            ):
                yield fragment
        except StructuralMismatchError as e:
            logger.error("Stream ended on unexpected response structure: %s", e)
            yield STRUCTURE_ERROR_NOTICE

    return StreamingResponse(fragments(), media_type="text/plain")


@app.post("/ai/analysis/quarterly", response_model=AnalysisRecord, response_model_by_alias=True)
async def quarterly_analysis(request: AnalysisRequest, source: Optional[TextSource] = Depends(get_source)):
    """
    Analyse the last three months of transactions.

    Every field of the response is filled; fields the model left out carry
    a default sentence.
    """
    if not request.transactions:
        raise HTTPException(status_code=400, detail="No transactions provided")
    if source is None:
        raise HTTPException(status_code=502, detail="AI service is not configured")

    analysis_service = AnalysisService(source)
    try:
        return await analysis_service.analyze_last_three_months(request.transactions)
    except IngestionError as e:
        logger.error("Quarterly analysis failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
