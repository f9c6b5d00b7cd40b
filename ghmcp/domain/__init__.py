"""Domain layer - Pure business logic.

This layer contains the value objects, enums, errors and protocols (ports)
of the credential, session, audit and workflow components. It has NO
dependencies on SQLAlchemy, httpx or any other infrastructure library.

Structure:
- enums/: Audit actions and workflow types
- errors/: Component-specific error values
- protocols/: Repository and service interfaces (ports)
- value_objects/: Immutable values (rate limit rules, client metadata)
- validators/: Pure input validation functions
"""
