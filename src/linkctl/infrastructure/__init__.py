"""Infrastructure layer — storage backends, templates, external processes.

This layer depends on stdlib, the domain model, and third-party libs
(tomli-w, Jinja2, Click). It must never import from services, commands,
output, or web. The service layer bridges between the two.
"""
