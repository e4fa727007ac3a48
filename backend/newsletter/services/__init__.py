"""Service layer: the subscription, confirmation, authentication and newsletter workflows.

Each workflow lives in its own subpackage (``service.py`` plus ``dto.py``);
shared primitives (base class, errors, ports, session capability) live in
``newsletter.services._shared``.
"""
