# Services package init
"""
Hersteller Service — Services Layer
=====================================

What:  Business logic between the transports (REST, GraphQL) and the database.
How:   Services receive an AsyncSession per call and return domain objects or
       tagged business outcomes. Instances are built once per application in
       hersteller_api.dependencies and handed to routes by FastAPI.

Service Inventory:
    - HerstellerValidationService: rule engine for payloads, id shape check
    - HerstellerReadService:       lookup by id, criteria search
    - HerstellerWriteService:      create / update / delete behind gates
    - MailService (abstract):      notification after create (SMTP or log)
    - version:                     version token codec ('"3"' ↔ 3)
    - errors:                      tagged business outcomes
"""
