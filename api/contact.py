"""
Contact form endpoint
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from schemas.requests import ContactRequest
from schemas.responses import ContactResponse
from services.mailer import ContactMailer, get_contact_mailer
from utils.exceptions import ConfigurationError, ExternalServiceError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/contact", response_model=ContactResponse, response_model_exclude_none=True)
async def send_contact_message(
    request: Request,
    mailer: ContactMailer = Depends(get_contact_mailer)
):
    """Relay a contact form submission to the site inbox"""
    try:
        payload = ContactRequest.model_validate(await request.json())
    except (ValueError, PydanticValidationError):
        payload = ContactRequest()

    missing = payload.missing_fields()
    if missing:
        return JSONResponse(status_code=400, content={"message": "Missing fields", "details": missing})

    try:
        await mailer.send(payload)
    except (ConfigurationError, ExternalServiceError) as e:
        return JSONResponse(status_code=500, content={"message": "Email failed", "details": e.message})

    return ContactResponse(message="Email sent successfully")
