"""
Login and sign-up screen.

Sign-up is a small gated flow: the email must be verified with a code
and the store name checked for availability before `sign_up` will send
the registration.
"""

import logging
from typing import Optional

from fastapi import Response
from pydantic import ValidationError

from kiosk_admin.schemas import LoginForm, SignUpForm
from kiosk_admin.screens.base import BaseScreen
from kiosk_admin.session import SessionManager

logger = logging.getLogger(__name__)


def first_error(error: ValidationError) -> str:
    """The message of the first failing field."""
    errors = error.errors()
    if not errors:
        return "Invalid input"
    message = errors[0].get("msg", "Invalid input")
    return message.removeprefix("Value error, ")


class AuthScreen(BaseScreen):
    name = "auth"

    def __init__(self, backend, toasts, session: SessionManager, gate=None):
        super().__init__(backend, toasts, gate)
        self.session = session
        self.verification_sent = False
        self.email_verified = False
        self.store_name_checked = False

    async def login(self, email: str, password: str, response: Optional[Response] = None) -> bool:
        try:
            form = LoginForm(email=email, password=password)
        except ValidationError as e:
            self.toasts.error(first_error(e))
            return False

        try:
            tokens = await self.backend.login(form.email, form.password)
        except Exception as e:
            self.report_failure("login", e, "Login failed", show_detail=False)
            return False

        self.session.set(tokens, response)
        return True

    async def send_verification_code(self, email: str) -> bool:
        try:
            await self.backend.send_email_code(email)
        except Exception as e:
            self.report_failure(
                "email verification", e,
                "Failed to send the verification code",
                show_detail=False,
            )
            return False

        self.verification_sent = True
        self.toasts.info("Verification code sent")
        return True

    async def verify_code(self, email: str, code: str) -> bool:
        try:
            await self.backend.verify_email_code(email, code)
        except Exception as e:
            self.report_failure("code verification", e, "Failed to verify the code")
            return False

        self.email_verified = True
        self.verification_sent = False
        self.toasts.info("Email verified")
        return True

    async def check_store_name(self, store_name: str, store_name_en: str) -> bool:
        try:
            await self.backend.check_store_name(store_name, store_name_en)
        except Exception as e:
            self.report_failure("store name check", e, "Failed to check the store name")
            return False

        self.store_name_checked = True
        self.toasts.info("Store name is available")
        return True

    async def sign_up(
        self,
        name: str,
        store_name: str,
        store_name_en: str,
        email: str,
        password: str,
    ) -> bool:
        try:
            form = SignUpForm(
                name=name,
                store_name=store_name,
                store_name_en=store_name_en,
                email=email,
                password=password,
            )
        except ValidationError as e:
            self.toasts.error(first_error(e))
            return False

        if not self.email_verified:
            self.toasts.error("Email verification is required")
            return False
        if not self.store_name_checked:
            self.toasts.error("Store name check is required")
            return False

        try:
            await self.backend.join(
                email=form.email,
                password=form.password,
                admin_name=form.name,
                store_name=form.store_name,
                store_name_en=form.store_name_en,
            )
        except Exception as e:
            self.report_failure("sign-up", e, "Sign-up failed", show_detail=False)
            return False

        self.toasts.success("Sign-up complete")
        self.email_verified = False
        self.store_name_checked = False
        return True

    def snapshot(self) -> dict:
        return {
            "signed_in": self.session.access_token is not None,
            "verification_sent": self.verification_sent,
            "email_verified": self.email_verified,
            "store_name_checked": self.store_name_checked,
        }
