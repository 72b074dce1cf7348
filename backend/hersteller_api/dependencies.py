"""
Hersteller Service — Service Wiring
=====================================

What:  Builds the service graph once per application and hands it to routes.
How:   create_app() calls build_services() and stores the container on
       app.state; the providers below read it back from the request.
Who:   Used by the REST routes (via Depends) and the GraphQL context getter.

Wiring:
    HerstellerValidationService
        └── HerstellerReadService(validation)
                └── HerstellerWriteService(read, validation, mail)

Tests pass their own MailService to create_app() instead of patching modules.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from hersteller_api.config import settings
from hersteller_api.services.mail_service import MailService, create_mail_service
from hersteller_api.services.read_service import HerstellerReadService
from hersteller_api.services.validation_service import HerstellerValidationService
from hersteller_api.services.write_service import HerstellerWriteService


@dataclass(frozen=True)
class HerstellerServices:
    validation: HerstellerValidationService
    reader: HerstellerReadService
    writer: HerstellerWriteService


def build_services(mail_service: Optional[MailService] = None) -> HerstellerServices:
    """Assemble the services; the mail collaborator defaults to the configured one."""
    validation = HerstellerValidationService()
    reader = HerstellerReadService(validation)
    writer = HerstellerWriteService(
        read_service=reader,
        validation_service=validation,
        mail_service=mail_service or create_mail_service(settings),
    )
    return HerstellerServices(validation=validation, reader=reader, writer=writer)


def get_services(request: Request) -> HerstellerServices:
    return request.app.state.services


def get_read_service(request: Request) -> HerstellerReadService:
    return get_services(request).reader


def get_write_service(request: Request) -> HerstellerWriteService:
    return get_services(request).writer
