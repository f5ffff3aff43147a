"""
Form submit controllers.

A controller owns one form's submission state. `submit()` validates first and
never calls the backend for an invalid form; in demo mode it succeeds without
any network traffic.
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from littlebridge.client.api_client import ApiClient, ApiError
from littlebridge.config import settings
from littlebridge.forms import validators

logger = logging.getLogger(__name__)

GENERIC_SUBMIT_ERROR = "Something went wrong. Please try again."


class FormController:
    validate: Callable[[Mapping[str, Any]], Dict[str, str]] = staticmethod(lambda values: {})
    duplicate_message: Optional[str] = None
    generic_error: str = GENERIC_SUBMIT_ERROR
    show_server_error = True

    def __init__(self, client: ApiClient, demo_mode: Optional[bool] = None):
        self.client = client
        self.demo_mode = settings.is_demo_mode if demo_mode is None else demo_mode
        self.submitting = False
        self.submitted = False
        self.errors: Dict[str, str] = {}
        self.submit_error: Optional[str] = None
        self.result: Any = None

    def submit(self, values: Mapping[str, Any]) -> bool:
        """Validate and send the form. Returns True once the submission succeeded."""
        self.errors = self.validate(values)
        if self.errors:
            return False

        self.submitting = True
        self.submitted = False
        self.submit_error = None
        try:
            if not self.demo_mode:
                self.result = self.send(values)
            self.submitted = True
        except ApiError as e:
            logger.warning(f"{type(self).__name__} submission failed: {e.message}")
            if self.duplicate_message and e.is_duplicate:
                self.submit_error = self.duplicate_message
            elif self.show_server_error and e.message:
                self.submit_error = e.message
            else:
                self.submit_error = self.generic_error
        except (requests.RequestException, ValueError) as e:
            # transport failure or an undecodable body
            logger.warning(f"{type(self).__name__} submission failed: {e}")
            self.submit_error = self.generic_error
        finally:
            self.submitting = False
        return self.submitted

    def send(self, values: Mapping[str, Any]) -> Any:
        raise NotImplementedError


class EducatorSignupForm(FormController):
    validate = staticmethod(validators.validate_educator_signup)
    duplicate_message = "You're already on our list! We'll be in touch soon."

    def send(self, values):
        return self.client.educators.create({
            "full_name": values["full_name"].strip(),
            "email": values["email"].strip().lower(),
            "suburb": values["suburb"].strip(),
            "languages": list(values["languages"]),
            "qualification": values.get("qualification") or None,
            "wwcc_number": values.get("wwcc_number") or None,
        })


class GuestEnquiryForm(FormController):
    validate = staticmethod(validators.validate_guest_enquiry)
    generic_error = "Something went wrong. Please try again or contact us directly."
    show_server_error = False

    def __init__(self, client: ApiClient, center_id: str, demo_mode: Optional[bool] = None):
        super().__init__(client, demo_mode)
        self.center_id = center_id

    def send(self, values):
        return self.client.enquiries.create({
            "center_id": self.center_id,
            "guest_name": values["name"].strip(),
            "guest_email": values["email"].strip(),
            "guest_phone": (values.get("phone") or "").strip() or None,
            "guest_child_age": values["child_age"],
            "guest_child_days_needed": values.get("days_needed") or None,
            "guest_suburb": values.get("suburb") or None,
            "guest_message": values["message"].strip(),
        })


class WaitlistForm(FormController):
    validate = staticmethod(validators.validate_waitlist)
    show_server_error = False

    def __init__(self, client: ApiClient, suburb: Optional[str] = None, demo_mode: Optional[bool] = None):
        super().__init__(client, demo_mode)
        self.suburb = suburb

    def send(self, values):
        return self.client.waitlist.join(values["email"].strip(), self.suburb)
