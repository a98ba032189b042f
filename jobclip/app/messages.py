"""
Message transport for extraction and opportunity capture.

`handle_message` dispatches an action message to the extraction engine or
the opportunity store and returns a response dict. The FastAPI routes wrap
it; they also fetch the page when a caller sends an address without HTML.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict

from jobclip.core.net import FetchError, fetch_html
from jobclip.core.page import PageSnapshot
from jobclip.extractors import extract_job_data, find_extractor, get_extractor_registry
from .opportunities import OpportunityStore

logger = logging.getLogger(__name__)
router = APIRouter()

GET_JOB_DATA = "getJobData"
SYNC_OPPORTUNITY = "syncOpportunity"
GET_OPPORTUNITIES = "getOpportunities"
DELETE_OPPORTUNITY = "deleteOpportunity"


class MessageRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    action: str
    url: Optional[str] = None
    html: Optional[str] = None
    state: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, Any]] = None
    id: Optional[str] = None


class ExtractRequest(BaseModel):
    url: str
    html: Optional[str] = None
    state: Optional[Dict[str, Any]] = None


class ExtractResponse(BaseModel):
    data: Dict[str, str]
    extractor: Optional[str] = None


class ExtractorInfo(BaseModel):
    name: str
    priority: int
    url_patterns: List[str]


def get_store() -> OpportunityStore:
    """Store dependency; overridden in tests."""
    return OpportunityStore()


def _get_job_data(request: Dict[str, Any]) -> Dict[str, Any]:
    url = request.get("url")
    if not url:
        return {"error": "Missing url"}
    page = PageSnapshot(url, request.get("html") or "", state=request.get("state"))
    posting = extract_job_data(page)
    return {"data": posting.to_dict()}


def _sync_opportunity(request: Dict[str, Any], store: OpportunityStore) -> Dict[str, Any]:
    data = request.get("data")
    if not isinstance(data, dict) or not data:
        return {"error": "Missing opportunity data"}
    record = store.save(data)
    return {"success": True, "id": record["id"]}


def _delete_opportunity(request: Dict[str, Any], store: OpportunityStore) -> Dict[str, Any]:
    opportunity_id = request.get("id")
    if not opportunity_id:
        return {"error": "Missing id"}
    return {"success": store.delete(opportunity_id)}


def handle_message(request: Dict[str, Any], store: Optional[OpportunityStore] = None) -> Dict[str, Any]:
    """
    Dispatch one action message.

    Args:
        request: Message with an `action` key and action-specific fields
        store: Opportunity store (defaults to JOBCLIP_STORE_PATH)

    Returns:
        Response dict; unknown actions yield {"error": "Unknown action: X"}
    """
    action = request.get("action") if isinstance(request, dict) else None
    logger.debug(f"[messages] Received action: {action}")

    if action == GET_JOB_DATA:
        return _get_job_data(request)

    if store is None:
        store = OpportunityStore()
    if action == SYNC_OPPORTUNITY:
        return _sync_opportunity(request, store)
    if action == GET_OPPORTUNITIES:
        return {"data": store.list()}
    if action == DELETE_OPPORTUNITY:
        return _delete_opportunity(request, store)

    logger.warning(f"[messages] Unknown action: {action}")
    return {"error": f"Unknown action: {action}"}


async def _load_html(url: str) -> str:
    try:
        return await fetch_html(url)
    except FetchError as e:
        logger.warning(f"[messages] Could not fetch {url}: {e}")
        raise HTTPException(status_code=502, detail=f"Could not fetch page: {e}")


@router.post("/api/messages")
async def post_message(message: MessageRequest, store: OpportunityStore = Depends(get_store)):
    """
    Message endpoint.

    A getJobData message without html is served by fetching the page first.
    """
    request = message.model_dump()
    if message.action == GET_JOB_DATA and message.url and not message.html:
        request["html"] = await _load_html(message.url)
    return handle_message(request, store=store)


@router.post("/api/extract", response_model=ExtractResponse)
async def extract(request: ExtractRequest):
    """Extract job data from supplied HTML, or from the fetched page."""
    html = request.html
    if not html:
        html = await _load_html(request.url)

    page = PageSnapshot(request.url, html, state=request.state)
    extractor = find_extractor(request.url)
    posting = extract_job_data(page)

    logger.info(f"[messages] /api/extract {request.url[:80]} -> {len(posting.to_dict())} fields")
    return ExtractResponse(
        data=posting.to_dict(),
        extractor=extractor.name if extractor else None,
    )


@router.get("/api/extractors", response_model=List[ExtractorInfo])
def list_extractors():
    """Registered extractors in dispatch order."""
    return [
        ExtractorInfo(name=info["name"], priority=info["priority"], url_patterns=info["url_patterns"])
        for info in get_extractor_registry().list_extractors()
    ]
