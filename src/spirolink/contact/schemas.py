"""
Request/response schemas for the contact endpoint.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from spirolink.email.dispatch import ContactRequest


class ContactSubmission(BaseModel):
    """Contact form body. Required fields are checked by the dispatcher."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    service_type: Optional[str] = Field(default=None, alias="serviceType")
    message: Optional[str] = None

    def to_contact_request(self) -> ContactRequest:
        return ContactRequest(
            name=self.name or "",
            email=self.email or "",
            message=self.message or "",
            phone=self.phone or None,
            service_type=self.service_type or None,
        )


class ContactResponse(BaseModel):
    success: bool = True
    message: str
    service: str
    warning: Optional[str] = None
