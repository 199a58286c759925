"""
API router for contact-form submissions.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from spirolink.config import Settings
from spirolink.contact.schemas import ContactResponse, ContactSubmission
from spirolink.email.dispatch import DispatchCoordinator, DispatchSettings
from spirolink.email.selector import ProviderState
from spirolink.shared.dependencies import get_app_settings, get_provider_state

router = APIRouter(tags=["contact"])

DISABLED_WARNING = (
    "Configure RESEND_API_KEY, SENDGRID_API_KEY, or EMAIL_USER/EMAIL_PASSWORD "
    "to enable email delivery"
)


def get_dispatch_coordinator(
    state: Annotated[ProviderState, Depends(get_provider_state)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> DispatchCoordinator:
    """Dependency for the dispatch coordinator."""
    return DispatchCoordinator(
        state,
        DispatchSettings(
            contact_recipient=settings.contact_recipient,
            brand_name=settings.brand_name,
        ),
    )


@router.post(
    "/contact",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Submit the contact form",
)
async def submit_contact(
    coordinator: Annotated[DispatchCoordinator, Depends(get_dispatch_coordinator)],
    body: Optional[ContactSubmission] = None,
) -> ContactResponse:
    """Send the operator notification and the submitter confirmation.

    Validation and provider errors are turned into the JSON error envelope by
    the application exception handlers.
    """
    submission = body or ContactSubmission()
    result = await coordinator.submit_contact(submission.to_contact_request())

    if result.disabled:
        return ContactResponse(
            message="Message received (email service currently disabled)",
            service=result.provider.value,
            warning=DISABLED_WARNING,
        )

    return ContactResponse(
        message="Email sent successfully",
        service=result.provider.value,
    )
